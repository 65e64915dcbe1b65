"""String templates for the Gin + GORM (Go) scaffold."""
from typing import List
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import (
    database_title,
    env_value,
    escape_double_quoted,
    join_blocks,
    parse_sql_url,
    sqlite_path,
    version_number,
)

MODULE = "github.com/backendio/api"

DRIVER_REQUIREMENTS = {
    "mysql": ["github.com/go-sql-driver/mysql v1.6.0", "gorm.io/driver/mysql v1.3.2"],
    "postgres": ["github.com/lib/pq v1.10.4", "gorm.io/driver/postgres v1.3.1"],
    "sqlite": ["gorm.io/driver/sqlite v1.3.1"],
}


def go_version(version: str) -> str:
    """Major.minor form used by the ``go`` directive ('1.21.3' -> '1.21')."""
    return ".".join(version_number(version, "1.21").split(".")[:2])


def dsn(options: GeneratorOptions) -> str:
    """Connection string in the form the GORM driver expects."""
    conn = options.database.connection_string
    if options.database.type == "sqlite":
        return sqlite_path(conn)
    if options.database.type == "mysql" and conn.startswith("mysql://"):
        parts = parse_sql_url(conn)
        credentials = parts["user"] or "root"
        if parts["password"]:
            credentials += ":" + parts["password"]
        host = parts["host"] or "localhost"
        port = parts["port"] or "3306"
        return f"{credentials}@tcp({host}:{port})/{parts['name'] or 'myapp'}?charset=utf8mb4&parseTime=True&loc=Local"
    return conn


def _swag(options: GeneratorOptions, lines: List[str]) -> str:
    """swag annotation comment lines, or nothing when Swagger is disabled."""
    if not options.features.swagger:
        return ""
    return "".join(f"// {line}\n" for line in lines)


def render_go_mod(options: GeneratorOptions) -> str:
    """Generate go.mod content."""
    features = options.features
    requirements = ["github.com/gin-gonic/gin v1.7.7", "github.com/joho/godotenv v1.4.0"]
    requirements += DRIVER_REQUIREMENTS[options.database.type]
    requirements.append("gorm.io/gorm v1.23.2")
    if features.jwt:
        requirements += [
            "github.com/golang-jwt/jwt v3.2.2+incompatible",
            "golang.org/x/crypto v0.0.0-20220214200702-86341886e292",
        ]
    if features.swagger:
        requirements += ["github.com/swaggo/gin-swagger v1.4.1", "github.com/swaggo/swag v1.7.9"]
    body = "\n".join(f"\t{req}" for req in requirements)
    return f"module {MODULE}\n\ngo {go_version(options.version)}\n\nrequire (\n{body}\n)\n"


def render_main_go(options: GeneratorOptions) -> str:
    """Generate main.go content."""
    imports = ['\t"log"', "", f'\t"{MODULE}/config"', f'\t"{MODULE}/database"']
    if options.features.swagger:
        imports.append(f'\t_ "{MODULE}/docs"')
    imports += [f'\t"{MODULE}/routes"', '\t"github.com/gin-gonic/gin"']
    annotations = _swag(options, [
        "@title BackendIO API",
        "@version 1.0",
        "@description API generated with BackendIO",
        "@host localhost:8080",
        "@BasePath /api",
    ])
    if options.features.jwt:
        annotations += _swag(options, [
            "@securityDefinitions.apikey BearerAuth",
            "@in header",
            "@name Authorization",
        ])
    return f"""package main

import (
{chr(10).join(imports)}
)

{annotations}func main() {{
	cfg := config.LoadConfig()

	db, err := database.InitDB(cfg)
	if err != nil {{
		log.Fatalf("Failed to connect to database: %v", err)
	}}

	r := gin.Default()
	routes.SetupRoutes(r, db)

	log.Printf("Server running on port %s", cfg.ServerPort)
	if err := r.Run(":" + cfg.ServerPort); err != nil {{
		log.Fatalf("Failed to start server: %v", err)
	}}
}}
"""


def render_config_go(options: GeneratorOptions) -> str:
    """Generate config/config.go content."""
    jwt = options.features.jwt
    fields = ["\tServerPort string", "\tDBType     string", "\tDBConnStr  string"]
    values = [
        '\t\tServerPort: getEnv("SERVER_PORT", "8080"),',
        f'\t\tDBType:     getEnv("DB_TYPE", "{options.database.type}"),',
        f'\t\tDBConnStr:  getEnv("DB_CONN_STR", "{escape_double_quoted(dsn(options))}"),',
    ]
    if jwt:
        fields += ["\tJWTSecret  string", "\tJWTExpiry  string"]
        values += [
            '\t\tJWTSecret:  getEnv("JWT_SECRET", "your_jwt_secret"),',
            '\t\tJWTExpiry:  getEnv("JWT_EXPIRY", "24h"),',
        ]
    return f"""package config

import (
	"os"

	"github.com/joho/godotenv"
)

// Config holds all configuration for the application
type Config struct {{
{chr(10).join(fields)}
}}

// LoadConfig loads configuration from the environment, reading .env when present
func LoadConfig() *Config {{
	_ = godotenv.Load()

	return &Config{{
{chr(10).join(values)}
	}}
}}

// getEnv gets an environment variable or returns a default value
func getEnv(key, defaultValue string) string {{
	value := os.Getenv(key)
	if value == "" {{
		return defaultValue
	}}
	return value
}}
"""


def env_lines(options: GeneratorOptions) -> List[str]:
    """Environment variables shared by .env and the README."""
    lines = [
        "SERVER_PORT=8080",
        f"DB_TYPE={options.database.type}",
        f"DB_CONN_STR={env_value(dsn(options))}",
    ]
    if options.features.jwt:
        lines += ["JWT_SECRET=your_jwt_secret", "JWT_EXPIRY=24h"]
    return lines


def render_env(options: GeneratorOptions) -> str:
    """Generate .env content."""
    return "# Environment variables\n" + "\n".join(env_lines(options)) + "\n"


def render_user_model(options: GeneratorOptions) -> str:
    """Generate models/user.go content."""
    jwt = options.features.jwt
    password_field = '\tPassword  string         `json:"-" gorm:"not null"`\n' if jwt else ""
    create_password = '\tPassword string `json:"password" binding:"required"`\n' if jwt else ""
    auth_types = ""
    if jwt:
        auth_types = """
// AuthRequest represents the authentication request
type AuthRequest struct {
	Username string `json:"username,omitempty"`
	Email    string `json:"email" binding:"required"`
	Password string `json:"password" binding:"required"`
}

// AuthResponse represents the authentication response
type AuthResponse struct {
	Token string `json:"token"`
	User  User   `json:"user"`
}
"""
    return f"""package models

import (
	"time"

	"gorm.io/gorm"
)

// User represents a user in the system
type User struct {{
	ID        uint           `json:"id" gorm:"primaryKey"`
	Username  string         `json:"username" gorm:"uniqueIndex;not null"`
	Email     string         `json:"email" gorm:"uniqueIndex;not null"`
{password_field}	CreatedAt time.Time      `json:"created_at"`
	UpdatedAt time.Time      `json:"updated_at"`
	DeletedAt gorm.DeletedAt `json:"-" gorm:"index"`
}}

// CreateUserRequest is the payload accepted when creating a user
type CreateUserRequest struct {{
	Username string `json:"username" binding:"required"`
	Email    string `json:"email" binding:"required"`
{create_password}}}

// UpdateUserRequest is the payload accepted when updating a user
type UpdateUserRequest struct {{
	Username string `json:"username,omitempty"`
	Email    string `json:"email,omitempty"`
}}
{auth_types}"""


def render_database_go(options: GeneratorOptions) -> str:
    """Generate database/database.go content."""
    driver = options.database.type
    return f"""package database

import (
	"{MODULE}/config"
	"{MODULE}/models"
	"gorm.io/driver/{driver}"
	"gorm.io/gorm"
)

// InitDB opens the {database_title(driver)} connection and migrates the schema
func InitDB(cfg *config.Config) (*gorm.DB, error) {{
	db, err := gorm.Open({driver}.Open(cfg.DBConnStr), &gorm.Config{{}})
	if err != nil {{
		return nil, err
	}}

	if err := db.AutoMigrate(&models.User{{}}); err != nil {{
		return nil, err
	}}

	return db, nil
}}
"""


def render_user_handler(options: GeneratorOptions) -> str:
    """Generate handlers/user_handler.go content (CRUD handlers)."""
    jwt = options.features.jwt
    imports = ['\t"net/http"', '\t"strconv"', "", f'\t"{MODULE}/models"', f'\t"{MODULE}/utils"',
               '\t"github.com/gin-gonic/gin"']
    if jwt:
        imports.append('\t"golang.org/x/crypto/bcrypt"')
    imports.append('\t"gorm.io/gorm"')

    security = ["@Security BearerAuth"] if jwt else []
    hash_block = ""
    password_assign = ""
    if jwt:
        hash_block = """
	hashedPassword, err := bcrypt.GenerateFromPassword([]byte(req.Password), bcrypt.DefaultCost)
	if err != nil {
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to hash password")
		return
	}
"""
        password_assign = "\t\tPassword: string(hashedPassword),\n"

    get_all_doc = _swag(options, [
        "@Summary Get all users", "@Tags users", "@Produce json", *security,
        "@Success 200 {array} models.User", "@Router /users [get]",
    ])
    create_doc = _swag(options, [
        "@Summary Create a new user", "@Tags users", "@Accept json", "@Produce json", *security,
        "@Param user body models.CreateUserRequest true \"User data\"",
        "@Success 201 {object} models.User", "@Failure 400 {object} utils.ErrorResponse",
        "@Router /users [post]",
    ])
    get_doc = _swag(options, [
        "@Summary Get a user by ID", "@Tags users", "@Produce json", *security,
        "@Param id path int true \"User ID\"", "@Success 200 {object} models.User",
        "@Failure 404 {object} utils.ErrorResponse", "@Router /users/{id} [get]",
    ])
    update_doc = _swag(options, [
        "@Summary Update a user", "@Tags users", "@Accept json", "@Produce json", *security,
        "@Param id path int true \"User ID\"",
        "@Param user body models.UpdateUserRequest true \"User data\"",
        "@Success 200 {object} models.User", "@Failure 404 {object} utils.ErrorResponse",
        "@Router /users/{id} [put]",
    ])
    delete_doc = _swag(options, [
        "@Summary Delete a user", "@Tags users", *security, "@Param id path int true \"User ID\"",
        "@Success 204", "@Failure 404 {object} utils.ErrorResponse", "@Router /users/{id} [delete]",
    ])

    return f"""package handlers

import (
{chr(10).join(imports)}
)

// UserHandler handles user-related requests
type UserHandler struct {{
	DB *gorm.DB
}}

// NewUserHandler creates a new UserHandler
func NewUserHandler(db *gorm.DB) *UserHandler {{
	return &UserHandler{{DB: db}}
}}

func parseID(c *gin.Context) (int, bool) {{
	id, err := strconv.Atoi(c.Param("id"))
	if err != nil {{
		utils.RespondWithError(c, http.StatusBadRequest, "Invalid user ID")
		return 0, false
	}}
	return id, true
}}

// GetAllUsers gets all users
{get_all_doc}func (h *UserHandler) GetAllUsers(c *gin.Context) {{
	var users []models.User
	if result := h.DB.Find(&users); result.Error != nil {{
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to get users")
		return
	}}

	utils.RespondWithJSON(c, http.StatusOK, users)
}}

// CreateUser creates a user
{create_doc}func (h *UserHandler) CreateUser(c *gin.Context) {{
	var req models.CreateUserRequest
	if err := c.ShouldBindJSON(&req); err != nil {{
		utils.RespondWithError(c, http.StatusBadRequest, "Invalid request body")
		return
	}}
{hash_block}
	user := models.User{{
		Username: req.Username,
		Email:    req.Email,
{password_assign}	}}
	if result := h.DB.Create(&user); result.Error != nil {{
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to create user")
		return
	}}

	utils.RespondWithJSON(c, http.StatusCreated, user)
}}

// GetUserByID gets a user by ID
{get_doc}func (h *UserHandler) GetUserByID(c *gin.Context) {{
	id, ok := parseID(c)
	if !ok {{
		return
	}}

	var user models.User
	if result := h.DB.First(&user, id); result.Error != nil {{
		utils.RespondWithError(c, http.StatusNotFound, "User not found")
		return
	}}

	utils.RespondWithJSON(c, http.StatusOK, user)
}}

// UpdateUser updates a user
{update_doc}func (h *UserHandler) UpdateUser(c *gin.Context) {{
	id, ok := parseID(c)
	if !ok {{
		return
	}}

	var user models.User
	if result := h.DB.First(&user, id); result.Error != nil {{
		utils.RespondWithError(c, http.StatusNotFound, "User not found")
		return
	}}

	var req models.UpdateUserRequest
	if err := c.ShouldBindJSON(&req); err != nil {{
		utils.RespondWithError(c, http.StatusBadRequest, "Invalid request body")
		return
	}}

	if req.Username != "" {{
		user.Username = req.Username
	}}
	if req.Email != "" {{
		user.Email = req.Email
	}}

	if result := h.DB.Save(&user); result.Error != nil {{
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to update user")
		return
	}}

	utils.RespondWithJSON(c, http.StatusOK, user)
}}

// DeleteUser deletes a user
{delete_doc}func (h *UserHandler) DeleteUser(c *gin.Context) {{
	id, ok := parseID(c)
	if !ok {{
		return
	}}

	var user models.User
	if result := h.DB.First(&user, id); result.Error != nil {{
		utils.RespondWithError(c, http.StatusNotFound, "User not found")
		return
	}}

	h.DB.Delete(&user)
	c.Status(http.StatusNoContent)
}}
"""


def render_auth_handler(options: GeneratorOptions) -> str:
    """Generate handlers/auth_handler.go content."""
    register_doc = _swag(options, [
        "@Summary Register a new user", "@Tags auth", "@Accept json", "@Produce json",
        "@Param user body models.AuthRequest true \"User registration data\"",
        "@Success 201 {object} utils.SuccessResponse", "@Failure 400 {object} utils.ErrorResponse",
        "@Router /auth/register [post]",
    ])
    login_doc = _swag(options, [
        "@Summary Login a user", "@Tags auth", "@Accept json", "@Produce json",
        "@Param user body models.AuthRequest true \"User login data\"",
        "@Success 200 {object} models.AuthResponse", "@Failure 401 {object} utils.ErrorResponse",
        "@Router /auth/login [post]",
    ])
    return f"""package handlers

import (
	"net/http"

	"{MODULE}/models"
	"{MODULE}/utils"
	"github.com/gin-gonic/gin"
	"golang.org/x/crypto/bcrypt"
	"gorm.io/gorm"
)

// AuthHandler handles authentication-related requests
type AuthHandler struct {{
	DB *gorm.DB
}}

// NewAuthHandler creates a new AuthHandler
func NewAuthHandler(db *gorm.DB) *AuthHandler {{
	return &AuthHandler{{DB: db}}
}}

// Register registers a new user
{register_doc}func (h *AuthHandler) Register(c *gin.Context) {{
	var req models.AuthRequest
	if err := c.ShouldBindJSON(&req); err != nil {{
		utils.RespondWithError(c, http.StatusBadRequest, "Invalid request body")
		return
	}}

	var existingUser models.User
	if result := h.DB.Where("email = ?", req.Email).First(&existingUser); result.Error == nil {{
		utils.RespondWithError(c, http.StatusBadRequest, "User with this email already exists")
		return
	}}

	hashedPassword, err := bcrypt.GenerateFromPassword([]byte(req.Password), bcrypt.DefaultCost)
	if err != nil {{
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to hash password")
		return
	}}

	user := models.User{{
		Username: req.Username,
		Email:    req.Email,
		Password: string(hashedPassword),
	}}
	if result := h.DB.Create(&user); result.Error != nil {{
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to create user")
		return
	}}

	utils.RespondWithSuccess(c, http.StatusCreated, "User registered successfully")
}}

// Login logs in a user and returns a JWT token
{login_doc}func (h *AuthHandler) Login(c *gin.Context) {{
	var req models.AuthRequest
	if err := c.ShouldBindJSON(&req); err != nil {{
		utils.RespondWithError(c, http.StatusBadRequest, "Invalid request body")
		return
	}}

	var user models.User
	if result := h.DB.Where("email = ?", req.Email).First(&user); result.Error != nil {{
		utils.RespondWithError(c, http.StatusUnauthorized, "Invalid credentials")
		return
	}}

	if err := bcrypt.CompareHashAndPassword([]byte(user.Password), []byte(req.Password)); err != nil {{
		utils.RespondWithError(c, http.StatusUnauthorized, "Invalid credentials")
		return
	}}

	token, err := utils.GenerateJWT(user.ID)
	if err != nil {{
		utils.RespondWithError(c, http.StatusInternalServerError, "Failed to generate token")
		return
	}}

	utils.RespondWithJSON(c, http.StatusOK, models.AuthResponse{{
		Token: token,
		User:  user,
	}})
}}
"""


def render_jwt_middleware() -> str:
    return f"""package middleware

import (
	"net/http"
	"strings"

	"{MODULE}/utils"
	"github.com/gin-gonic/gin"
)

// JWTAuth rejects requests without a valid bearer token
func JWTAuth() gin.HandlerFunc {{
	return func(c *gin.Context) {{
		authHeader := c.GetHeader("Authorization")
		if authHeader == "" {{
			utils.RespondWithError(c, http.StatusUnauthorized, "Authorization header is required")
			c.Abort()
			return
		}}

		parts := strings.Split(authHeader, " ")
		if len(parts) != 2 || parts[0] != "Bearer" {{
			utils.RespondWithError(c, http.StatusUnauthorized, "Authorization header format must be Bearer {{token}}")
			c.Abort()
			return
		}}

		claims, err := utils.ValidateJWT(parts[1])
		if err != nil {{
			utils.RespondWithError(c, http.StatusUnauthorized, "Invalid or expired token")
			c.Abort()
			return
		}}

		c.Set("userID", claims.UserID)
		c.Next()
	}}
}}
"""


def render_routes_go(options: GeneratorOptions) -> str:
    """Generate routes/routes.go content."""
    features = options.features
    imports = [f'\t"{MODULE}/handlers"']
    if features.jwt:
        imports.append(f'\t"{MODULE}/middleware"')
    imports.append('\t"github.com/gin-gonic/gin"')
    if features.swagger:
        imports += [
            '\tginSwagger "github.com/swaggo/gin-swagger"',
            '\t"github.com/swaggo/gin-swagger/swaggerFiles"',
        ]
    imports.append('\t"gorm.io/gorm"')

    body = ["\tuserHandler := handlers.NewUserHandler(db)"]
    if features.jwt:
        body.append("\tauthHandler := handlers.NewAuthHandler(db)")
    body += ["", '\tapi := r.Group("/api")']
    if features.jwt:
        body += [
            "",
            '\tauth := api.Group("/auth")',
            "\t{",
            '\t\tauth.POST("/register", authHandler.Register)',
            '\t\tauth.POST("/login", authHandler.Login)',
            "\t}",
        ]
    body += ["", '\tusers := api.Group("/users")']
    if features.jwt:
        body.append("\tusers.Use(middleware.JWTAuth())")
    body += [
        "\t{",
        '\t\tusers.GET("", userHandler.GetAllUsers)',
        '\t\tusers.POST("", userHandler.CreateUser)',
        '\t\tusers.GET("/:id", userHandler.GetUserByID)',
        '\t\tusers.PUT("/:id", userHandler.UpdateUser)',
        '\t\tusers.DELETE("/:id", userHandler.DeleteUser)',
        "\t}",
    ]
    if features.swagger:
        body += ["", '\tr.GET("/swagger/*any", ginSwagger.WrapHandler(swaggerFiles.Handler))']
    body += [
        "",
        '\tr.GET("/health", func(c *gin.Context) {',
        '\t\tc.JSON(200, gin.H{"status": "ok"})',
        "\t})",
    ]
    return f"""package routes

import (
{chr(10).join(imports)}
)

// SetupRoutes registers every route of the application
func SetupRoutes(r *gin.Engine, db *gorm.DB) {{
{chr(10).join(body)}
}}
"""


def render_jwt_utils() -> str:
    """Generate utils/jwt_utils.go content."""
    return f"""package utils

import (
	"errors"
	"time"

	"{MODULE}/config"
	"github.com/golang-jwt/jwt"
)

// JWTClaims represents the claims in the JWT
type JWTClaims struct {{
	UserID uint `json:"user_id"`
	jwt.StandardClaims
}}

// GenerateJWT generates a signed token for a user
func GenerateJWT(userID uint) (string, error) {{
	cfg := config.LoadConfig()

	expiry, err := time.ParseDuration(cfg.JWTExpiry)
	if err != nil {{
		return "", err
	}}

	now := time.Now()
	claims := JWTClaims{{
		UserID: userID,
		StandardClaims: jwt.StandardClaims{{
			ExpiresAt: now.Add(expiry).Unix(),
			IssuedAt:  now.Unix(),
			Issuer:    "backendio",
		}},
	}}

	token := jwt.NewWithClaims(jwt.SigningMethodHS256, claims)
	return token.SignedString([]byte(cfg.JWTSecret))
}}

// ValidateJWT validates a token and returns its claims
func ValidateJWT(tokenString string) (*JWTClaims, error) {{
	cfg := config.LoadConfig()

	token, err := jwt.ParseWithClaims(tokenString, &JWTClaims{{}}, func(token *jwt.Token) (interface{{}}, error) {{
		if _, ok := token.Method.(*jwt.SigningMethodHMAC); !ok {{
			return nil, errors.New("unexpected signing method")
		}}
		return []byte(cfg.JWTSecret), nil
	}})
	if err != nil {{
		return nil, err
	}}

	claims, ok := token.Claims.(*JWTClaims)
	if !ok || !token.Valid {{
		return nil, errors.New("invalid token")
	}}

	return claims, nil
}}
"""


def render_response_utils() -> str:
    return """package utils

import (
	"github.com/gin-gonic/gin"
)

// ErrorResponse represents an error response
type ErrorResponse struct {
	Error string `json:"error"`
}

// SuccessResponse represents a success response
type SuccessResponse struct {
	Message string `json:"message"`
}

// RespondWithError sends an error response
func RespondWithError(c *gin.Context, code int, message string) {
	c.JSON(code, ErrorResponse{Error: message})
}

// RespondWithJSON sends a JSON response
func RespondWithJSON(c *gin.Context, code int, payload interface{}) {
	c.JSON(code, payload)
}

// RespondWithSuccess sends a success response
func RespondWithSuccess(c *gin.Context, code int, message string) {
	c.JSON(code, SuccessResponse{Message: message})
}
"""


def render_user_handler_test() -> str:
    """Generate handlers/user_handler_test.go (request validation, no database)."""
    return """package handlers

import (
	"net/http"
	"net/http/httptest"
	"strings"
	"testing"

	"github.com/gin-gonic/gin"
)

func setupRouter() *gin.Engine {
	gin.SetMode(gin.TestMode)
	r := gin.New()
	h := NewUserHandler(nil)
	r.POST("/api/users", h.CreateUser)
	r.GET("/api/users/:id", h.GetUserByID)
	r.PUT("/api/users/:id", h.UpdateUser)
	r.DELETE("/api/users/:id", h.DeleteUser)
	return r
}

func TestInvalidUserIDIsRejected(t *testing.T) {
	r := setupRouter()

	for _, method := range []string{http.MethodGet, http.MethodPut, http.MethodDelete} {
		w := httptest.NewRecorder()
		req, _ := http.NewRequest(method, "/api/users/abc", nil)
		r.ServeHTTP(w, req)

		if w.Code != http.StatusBadRequest {
			t.Errorf("%s /api/users/abc: expected 400, got %d", method, w.Code)
		}
	}
}

func TestCreateUserRequiresBody(t *testing.T) {
	r := setupRouter()

	w := httptest.NewRecorder()
	req, _ := http.NewRequest(http.MethodPost, "/api/users", strings.NewReader("{}"))
	req.Header.Set("Content-Type", "application/json")
	r.ServeHTTP(w, req)

	if w.Code != http.StatusBadRequest {
		t.Errorf("expected 400, got %d", w.Code)
	}
}
"""


def render_readme(options: GeneratorOptions) -> str:
    """Generate README.md content."""
    features = options.features
    db_name = database_title(options.database.type)

    feature_lines = ["- Gin Web Framework"]
    if features.jwt:
        feature_lines.append("- JWT Authentication")
    if features.crud:
        feature_lines.append("- CRUD Operations")
    if features.swagger:
        feature_lines.append("- Swagger Documentation")
    if features.tests:
        feature_lines.append("- Unit Tests")
    feature_lines.append(f"- {db_name} Database with GORM")

    endpoints = [
        "### Users",
        "- GET /api/users - Get all users",
        "- POST /api/users - Create a new user",
        "- GET /api/users/:id - Get a user by ID",
        "- PUT /api/users/:id - Update a user",
        "- DELETE /api/users/:id - Delete a user",
    ]
    if features.jwt:
        endpoints += [
            "",
            "### Authentication",
            "- POST /api/auth/register - Register a new user",
            "- POST /api/auth/login - Login and get a JWT token",
        ]

    install = ["```bash", "go mod tidy"]
    if features.swagger:
        install += ["go install github.com/swaggo/swag/cmd/swag@v1.7.9", "swag init"]
    install.append("```")

    docs = (
        "## API Documentation\n\nSwagger documentation is available at http://localhost:8080/swagger/index.html\n"
        if features.swagger else ""
    )
    tests = "## Running Tests\n\n```bash\ngo test ./...\n```\n" if features.tests else ""
    env_block = "\n".join(env_lines(options))

    return join_blocks(
        f"""# Go API

This project was generated with BackendIO.

## Features

{chr(10).join(feature_lines)}

## Requirements

- Go {go_version(options.version)}

## Installation

1. Clone the repository
2. Install dependencies:
{chr(10).join(install)}

3. Set up environment variables:
Create a .env file with the following variables:
```
{env_block}
```

## Running the Application

```bash
go run main.go
```

The API will be available at http://localhost:8080
""",
        docs,
        tests,
        "## API Endpoints\n\n" + "\n".join(endpoints) + "\n",
        "## Generated with BackendIO\n",
    )
