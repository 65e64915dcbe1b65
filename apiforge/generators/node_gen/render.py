"""String templates for the Express (Node.js) scaffold."""
from typing import Dict, List
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import (
    database_title,
    env_value,
    join_blocks,
    parse_sql_url,
    sqlite_path,
    to_json,
)

SQL_DATABASES = ("mysql", "postgres", "sqlite")


def _is_mongo(options: GeneratorOptions) -> bool:
    return options.database.type == "mongodb"


def _swagger_block(options: GeneratorOptions, lines: List[str]) -> str:
    """Render a JSDoc ``@swagger`` block, or nothing when Swagger is disabled."""
    if not options.features.swagger:
        return ""
    body = "\n".join(f" * {line}".rstrip() for line in lines)
    return f"/**\n * @swagger\n{body}\n */\n"


def render_package_json(options: GeneratorOptions) -> str:
    """Generate package.json content."""
    features = options.features
    db_type = options.database.type

    dependencies: Dict[str, str] = {"express": "^4.18.0", "cors": "^2.8.5"}
    if db_type == "mongodb":
        dependencies["mongoose"] = "^6.0.0"
    elif db_type == "mysql":
        dependencies.update({"mysql2": "^2.3.3", "sequelize": "^6.19.0"})
    elif db_type == "postgres":
        dependencies.update({"pg": "^8.7.3", "pg-hstore": "^2.3.4", "sequelize": "^6.19.0"})
    elif db_type == "sqlite":
        dependencies.update({"sqlite3": "^5.0.8", "sequelize": "^6.19.0"})
    if features.jwt:
        dependencies.update({"jsonwebtoken": "^8.5.1", "bcryptjs": "^2.4.3"})
    if features.swagger:
        dependencies.update({"swagger-ui-express": "^4.3.0", "swagger-jsdoc": "^6.2.1"})
    dependencies["dotenv"] = "^16.0.0"

    dev_dependencies: Dict[str, str] = {}
    if features.tests:
        dev_dependencies.update({"jest": "^28.0.0", "supertest": "^6.2.3"})
    dev_dependencies["nodemon"] = "^2.0.15"

    package = {
        "name": "backend-generator",
        "version": "1.0.0",
        "description": "Generated backend",
        "main": "index.js",
        "engines": {"node": options.version},
        "scripts": {
            "start": "node index.js",
            "dev": "nodemon index.js",
            "test": "jest --runInBand" if features.tests else 'echo "Error: no test specified" && exit 1',
        },
        "dependencies": dependencies,
        "devDependencies": dev_dependencies,
    }
    return to_json(package)


def render_index_js(options: GeneratorOptions) -> str:
    """Generate index.js content (entry point and route registration)."""
    features = options.features
    header = """require('dotenv').config();
const express = require('express');
const cors = require('cors');

const app = express();
const PORT = process.env.PORT || 3000;

app.use(cors());
app.use(express.json());

// Database connection
require('./config/db.config');

// Welcome route
app.get('/', (req, res) => {
  res.json({ message: 'Welcome to the API' });
});
"""
    swagger = ""
    if features.swagger:
        swagger = """
// Swagger documentation
const swaggerJsDoc = require('swagger-jsdoc');
const swaggerUi = require('swagger-ui-express');

const swaggerOptions = {
  swaggerDefinition: {
    openapi: '3.0.0',
    info: {
      title: 'API Documentation',
      version: '1.0.0',
      description: 'API Documentation',
    },
    servers: [
      {
        url: 'http://localhost:' + PORT,
        description: 'Development server',
      },
    ],
  },
  apis: ['./routes/*.js', './models/*.js'],
};

const swaggerDocs = swaggerJsDoc(swaggerOptions);
app.use('/api-docs', swaggerUi.serve, swaggerUi.setup(swaggerDocs));
"""
    routes = [
        "",
        "// Routes",
        "const userRoutes = require('./routes/user.routes');",
        "app.use('/api/users', userRoutes);",
    ]
    if features.jwt:
        routes += [
            "const authRoutes = require('./routes/auth.routes');",
            "app.use('/api/auth', authRoutes);",
        ]
    if features.tests:
        start = """
// Start server
if (require.main === module) {
  app.listen(PORT, () => {
    console.log(`Server is running on port ${PORT}`);
  });
}

module.exports = app;
"""
    else:
        start = """
// Start server
app.listen(PORT, () => {
  console.log(`Server is running on port ${PORT}`);
});
"""
    return header + swagger + "\n".join(routes) + "\n" + start


def _sql_env_lines(options: GeneratorOptions) -> List[str]:
    db_type = options.database.type
    conn = options.database.connection_string
    if db_type == "sqlite":
        return [
            "DB_HOST=localhost",
            "DB_USER=",
            "DB_PASSWORD=",
            f"DB_NAME={env_value(sqlite_path(conn))}",
            "DB_DIALECT=sqlite",
        ]
    parts = parse_sql_url(conn)
    lines = [
        f"DB_HOST={env_value(parts['host'] or 'localhost')}",
        f"DB_USER={env_value(parts['user'] or 'root')}",
        f"DB_PASSWORD={env_value(parts['password'] or 'password')}",
        f"DB_NAME={env_value(parts['name'] or 'mydb')}",
    ]
    if parts["port"]:
        lines.append(f"DB_PORT={parts['port']}")
    lines.append(f"DB_DIALECT={db_type}")
    return lines


def env_lines(options: GeneratorOptions) -> List[str]:
    """Environment variables shared by .env and the README."""
    lines = ["PORT=3000"]
    if _is_mongo(options):
        lines.append(f"MONGODB_URI={env_value(options.database.connection_string)}")
    else:
        lines.extend(_sql_env_lines(options))
    if options.features.jwt:
        lines += ["JWT_SECRET=your_jwt_secret_key", "JWT_EXPIRES_IN=1h"]
    return lines


def render_env(options: GeneratorOptions) -> str:
    """Generate .env content."""
    return "\n".join(env_lines(options)) + "\n"


def render_db_config(options: GeneratorOptions) -> str:
    """Generate config/db.config.js content."""
    if _is_mongo(options):
        return """const mongoose = require('mongoose');

mongoose.connect(process.env.MONGODB_URI, {
  useNewUrlParser: true,
  useUnifiedTopology: true,
})
  .then(() => console.log('Connected to MongoDB'))
  .catch(err => console.error('MongoDB connection error:', err));

module.exports = mongoose;
"""
    storage = "    storage: process.env.DB_NAME,\n" if options.database.type == "sqlite" else ""
    port = "" if options.database.type == "sqlite" else "    port: process.env.DB_PORT,\n"
    return f"""const {{ Sequelize }} = require('sequelize');

const sequelize = new Sequelize(
  process.env.DB_NAME,
  process.env.DB_USER,
  process.env.DB_PASSWORD,
  {{
    host: process.env.DB_HOST,
{port}    dialect: process.env.DB_DIALECT,
{storage}    logging: false,
  }}
);

// Test the connection and sync all models
(async () => {{
  try {{
    await sequelize.authenticate();
    console.log('Database connection has been established successfully.');
    await sequelize.sync();
    console.log('All models were synchronized successfully.');
  }} catch (error) {{
    console.error('Unable to connect to the database:', error);
  }}
}})();

module.exports = sequelize;
"""


def _user_schema_doc(options: GeneratorOptions) -> str:
    id_line = ["    _id:", "      type: string"] if _is_mongo(options) else ["    id:", "      type: integer"]
    return _swagger_block(options, [
        "components:",
        "  schemas:",
        "    User:",
        "      type: object",
        "      required:",
        "        - name",
        "        - email",
        "      properties:",
        *["  " + line for line in id_line],
        "        name:",
        "          type: string",
        "        email:",
        "          type: string",
        "        createdAt:",
        "          type: string",
        "          format: date",
        "        updatedAt:",
        "          type: string",
        "          format: date",
    ])


def render_user_model(options: GeneratorOptions) -> str:
    """Generate models/user.model.js content."""
    doc = _user_schema_doc(options)
    if _is_mongo(options):
        password = """  password: {
    type: String,
    required: true,
  },
""" if options.features.jwt else ""
        return f"""const mongoose = require('mongoose');

{doc}const userSchema = new mongoose.Schema({{
  name: {{
    type: String,
    required: true,
  }},
  email: {{
    type: String,
    required: true,
    unique: true,
  }},
{password}}}, {{
  timestamps: true,
}});

module.exports = mongoose.model('User', userSchema);
"""
    password = """  password: {
    type: DataTypes.STRING,
    allowNull: false,
  },
""" if options.features.jwt else ""
    return f"""const {{ DataTypes }} = require('sequelize');
const sequelize = require('../config/db.config');

{doc}const User = sequelize.define('User', {{
  name: {{
    type: DataTypes.STRING,
    allowNull: false,
  }},
  email: {{
    type: DataTypes.STRING,
    allowNull: false,
    unique: true,
  }},
{password}}});

module.exports = User;
"""


def render_user_controller(options: GeneratorOptions) -> str:
    """Generate controllers/user.controller.js content."""
    if _is_mongo(options):
        create = """    const user = new User(req.body);
    const savedUser = await user.save();
    res.status(201).json(savedUser);"""
        find_all = "await User.find()"
        find_one = "await User.findById(req.params.id)"
        update = """    const user = await User.findByIdAndUpdate(req.params.id, req.body, { new: true });
    if (!user) {
      return res.status(404).json({ message: 'User not found' });
    }
    res.status(200).json(user);"""
        remove = """    const user = await User.findByIdAndDelete(req.params.id);
    if (!user) {
      return res.status(404).json({ message: 'User not found' });
    }"""
    else:
        create = """    const user = await User.create(req.body);
    res.status(201).json(user);"""
        find_all = "await User.findAll()"
        find_one = "await User.findByPk(req.params.id)"
        update = """    const [updated] = await User.update(req.body, {
      where: { id: req.params.id }
    });
    if (updated === 0) {
      return res.status(404).json({ message: 'User not found' });
    }
    const updatedUser = await User.findByPk(req.params.id);
    res.status(200).json(updatedUser);"""
        remove = """    const deleted = await User.destroy({
      where: { id: req.params.id }
    });
    if (deleted === 0) {
      return res.status(404).json({ message: 'User not found' });
    }"""

    return f"""const User = require('../models/user.model');

// Create a new user
exports.create = async (req, res) => {{
  try {{
{create}
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};

// Get all users
exports.findAll = async (req, res) => {{
  try {{
    const users = {find_all};
    res.status(200).json(users);
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};

// Get a single user by ID
exports.findOne = async (req, res) => {{
  try {{
    const user = {find_one};
    if (!user) {{
      return res.status(404).json({{ message: 'User not found' }});
    }}
    res.status(200).json(user);
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};

// Update a user
exports.update = async (req, res) => {{
  try {{
{update}
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};

// Delete a user
exports.delete = async (req, res) => {{
  try {{
{remove}
    res.status(200).json({{ message: 'User deleted successfully' }});
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};
"""


def _id_param_doc() -> List[str]:
    return [
        "    parameters:",
        "      - in: path",
        "        name: id",
        "        schema:",
        "          type: string",
        "        required: true",
        "        description: User ID",
    ]


def render_user_routes(options: GeneratorOptions) -> str:
    """Generate routes/user.routes.js content."""
    guard = "verifyToken, " if options.features.jwt else ""
    lines = [
        "const express = require('express');",
        "const router = express.Router();",
        "const userController = require('../controllers/user.controller');",
    ]
    if options.features.jwt:
        lines.append("const { verifyToken } = require('../middleware/auth.middleware');")
    header = "\n".join(lines) + "\n"

    user_ref = "$ref: '#/components/schemas/User'"
    endpoints = [
        (["/api/users:", "  get:", "    summary: Get all users", "    tags: [Users]",
          "    responses:", "      200:", "        description: List of users"],
         f"router.get('/', {guard}userController.findAll);"),
        (["/api/users/{id}:", "  get:", "    summary: Get a user by ID", "    tags: [Users]",
          *_id_param_doc(), "    responses:", "      200:", "        description: User details",
          "      404:", "        description: User not found"],
         f"router.get('/:id', {guard}userController.findOne);"),
        (["/api/users:", "  post:", "    summary: Create a new user", "    tags: [Users]",
          "    requestBody:", "      required: true", "      content:", "        application/json:",
          "          schema:", f"            {user_ref}",
          "    responses:", "      201:", "        description: User created successfully"],
         f"router.post('/', {guard}userController.create);"),
        (["/api/users/{id}:", "  put:", "    summary: Update a user", "    tags: [Users]",
          *_id_param_doc(), "    responses:", "      200:", "        description: User updated successfully",
          "      404:", "        description: User not found"],
         f"router.put('/:id', {guard}userController.update);"),
        (["/api/users/{id}:", "  delete:", "    summary: Delete a user", "    tags: [Users]",
          *_id_param_doc(), "    responses:", "      200:", "        description: User deleted successfully",
          "      404:", "        description: User not found"],
         f"router.delete('/:id', {guard}userController.delete);"),
    ]
    blocks = [_swagger_block(options, doc) + route for doc, route in endpoints]
    return header + "\n" + "\n\n".join(blocks) + "\n\nmodule.exports = router;\n"


def render_auth_controller(options: GeneratorOptions) -> str:
    """Generate controllers/auth.controller.js content."""
    if _is_mongo(options):
        find_by_email = "await User.findOne({ email: req.body.email })"
        find_by_id = "await User.findById(req.userId)"
        create = """    const user = new User({
      name: req.body.name,
      email: req.body.email,
      password: hashedPassword,
    });
    const savedUser = await user.save();
    const userResponse = savedUser.toObject();"""
        to_plain = "user.toObject()"
        user_id = "user._id"
    else:
        find_by_email = "await User.findOne({ where: { email: req.body.email } })"
        find_by_id = "await User.findByPk(req.userId)"
        create = """    const user = await User.create({
      name: req.body.name,
      email: req.body.email,
      password: hashedPassword,
    });
    const userResponse = user.toJSON();"""
        to_plain = "user.toJSON()"
        user_id = "user.id"

    return f"""const User = require('../models/user.model');
const bcrypt = require('bcryptjs');
const jwt = require('jsonwebtoken');

// Register a new user
exports.register = async (req, res) => {{
  try {{
    const existingUser = {find_by_email};
    if (existingUser) {{
      return res.status(400).json({{ message: 'User already exists' }});
    }}

    const hashedPassword = await bcrypt.hash(req.body.password, 10);

{create}
    delete userResponse.password;

    res.status(201).json(userResponse);
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};

// Login user
exports.login = async (req, res) => {{
  try {{
    const user = {find_by_email};
    if (!user) {{
      return res.status(401).json({{ message: 'Invalid credentials' }});
    }}

    const isPasswordValid = await bcrypt.compare(req.body.password, user.password);
    if (!isPasswordValid) {{
      return res.status(401).json({{ message: 'Invalid credentials' }});
    }}

    const token = jwt.sign(
      {{ id: {user_id} }},
      process.env.JWT_SECRET,
      {{ expiresIn: process.env.JWT_EXPIRES_IN }}
    );

    const userResponse = {to_plain};
    delete userResponse.password;

    res.status(200).json({{
      user: userResponse,
      token,
    }});
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};

// Get current user
exports.getCurrentUser = async (req, res) => {{
  try {{
    const user = {find_by_id};
    if (!user) {{
      return res.status(404).json({{ message: 'User not found' }});
    }}

    const userResponse = {to_plain};
    delete userResponse.password;

    res.status(200).json(userResponse);
  }} catch (error) {{
    res.status(500).json({{ message: error.message }});
  }}
}};
"""


def render_auth_routes(options: GeneratorOptions) -> str:
    """Generate routes/auth.routes.js content."""
    register_doc = _swagger_block(options, [
        "/api/auth/register:",
        "  post:",
        "    summary: Register a new user",
        "    tags: [Auth]",
        "    responses:",
        "      201:",
        "        description: User registered successfully",
        "      400:",
        "        description: User already exists",
    ])
    login_doc = _swagger_block(options, [
        "/api/auth/login:",
        "  post:",
        "    summary: Login a user",
        "    tags: [Auth]",
        "    responses:",
        "      200:",
        "        description: Login successful",
        "      401:",
        "        description: Invalid credentials",
    ])
    me_doc = _swagger_block(options, [
        "/api/auth/me:",
        "  get:",
        "    summary: Get current user",
        "    tags: [Auth]",
        "    security:",
        "      - bearerAuth: []",
        "    responses:",
        "      200:",
        "        description: Current user details",
        "      401:",
        "        description: Unauthorized",
    ])
    return f"""const express = require('express');
const router = express.Router();
const authController = require('../controllers/auth.controller');
const {{ verifyToken }} = require('../middleware/auth.middleware');

{register_doc}router.post('/register', authController.register);

{login_doc}router.post('/login', authController.login);

{me_doc}router.get('/me', verifyToken, authController.getCurrentUser);

module.exports = router;
"""


def render_auth_middleware() -> str:
    """Generate middleware/auth.middleware.js content."""
    return """const jwt = require('jsonwebtoken');

exports.verifyToken = (req, res, next) => {
  const authHeader = req.headers.authorization;

  if (!authHeader) {
    return res.status(401).json({ message: 'No token provided' });
  }

  const token = authHeader.split(' ')[1];

  if (!token) {
    return res.status(401).json({ message: 'No token provided' });
  }

  try {
    const decoded = jwt.verify(token, process.env.JWT_SECRET);
    req.userId = decoded.id;
    next();
  } catch (error) {
    return res.status(401).json({ message: 'Invalid token' });
  }
};
"""


def render_user_test(options: GeneratorOptions) -> str:
    """Generate tests/user.test.js content."""
    mongo = _is_mongo(options)
    jwt = options.features.jwt
    auth_header = "\n      .set('Authorization', `Bearer ${token}`)" if jwt else ""
    connection = (
        "const mongoose = require('mongoose');" if mongo else "const sequelize = require('../config/db.config');"
    )
    clear = "await User.deleteMany({});" if mongo else "await User.destroy({ where: {}, truncate: true });"
    close = "await mongoose.connection.close();" if mongo else "await sequelize.close();"
    id_field = "_id" if mongo else "id"
    missing_id = "60f1a5c5c6e1e52d68a38f99" if mongo else "999"

    if jwt:
        setup = """  await request(app)
    .post('/api/auth/register')
    .send({ name: 'Test User', email: 'test@example.com', password: 'password123' });

  const loginResponse = await request(app)
    .post('/api/auth/login')
    .send({ email: 'test@example.com', password: 'password123' });

  token = loginResponse.body.token;
  userId = loginResponse.body.user.""" + id_field + ";"
    else:
        setup = """  const response = await request(app)
    .post('/api/users')
    .send({ name: 'Test User', email: 'test@example.com' });

  userId = response.body.""" + id_field + ";"

    token_decl = "let token;\n" if jwt else ""
    return f"""const request = require('supertest');
const app = require('../index');
{connection}
const User = require('../models/user.model');

{token_decl}let userId;

beforeAll(async () => {{
  {clear}

{setup}
}});

afterAll(async () => {{
  {close}
}});

describe('User API', () => {{
  it('should get all users', async () => {{
    const response = await request(app)
      .get('/api/users'){auth_header};

    expect(response.status).toBe(200);
    expect(Array.isArray(response.body)).toBe(true);
  }});

  it('should get a user by ID', async () => {{
    const response = await request(app)
      .get(`/api/users/${{userId}}`){auth_header};

    expect(response.status).toBe(200);
    expect(response.body.name).toBe('Test User');
  }});

  it('should update a user', async () => {{
    const response = await request(app)
      .put(`/api/users/${{userId}}`){auth_header}
      .send({{ name: 'Updated User' }});

    expect(response.status).toBe(200);
    expect(response.body.name).toBe('Updated User');
  }});

  it('should return 404 for non-existent user', async () => {{
    const response = await request(app)
      .get('/api/users/{missing_id}'){auth_header};

    expect(response.status).toBe(404);
  }});
}});
"""


def render_readme(options: GeneratorOptions) -> str:
    """Generate README.md content."""
    features = options.features
    db_name = database_title(options.database.type)

    feature_lines = ["- Express.js REST API"]
    if features.jwt:
        feature_lines.append("- JWT Authentication")
    if features.crud:
        feature_lines.append("- CRUD Operations")
    if features.swagger:
        feature_lines.append("- Swagger Documentation")
    if features.tests:
        feature_lines.append("- Jest Testing")
    feature_lines.append(f"- {db_name} Database")

    endpoints = [
        "### Users",
        "- GET /api/users - Get all users",
        "- GET /api/users/:id - Get a user by ID",
        "- POST /api/users - Create a new user",
        "- PUT /api/users/:id - Update a user",
        "- DELETE /api/users/:id - Delete a user",
    ]
    if features.jwt:
        endpoints += [
            "",
            "### Authentication",
            "- POST /api/auth/register - Register a new user",
            "- POST /api/auth/login - Login and get a JWT token",
            "- GET /api/auth/me - Get current user (requires authentication)",
        ]

    docs = (
        "## API Documentation\n\nSwagger documentation is available at http://localhost:3000/api-docs\n"
        if features.swagger else ""
    )
    tests = "## Running Tests\n\n```bash\nnpm test\n```\n" if features.tests else ""
    env_block = "\n".join(env_lines(options))

    return join_blocks(
        f"""# Node.js Backend API

This is a Node.js backend API generated with BackendIO.

## Features

{chr(10).join(feature_lines)}

## Requirements

- Node.js {options.version}
- {db_name} Database

## Installation

1. Clone the repository
2. Install dependencies:
```bash
npm install
```

3. Set up environment variables:
Create a .env file with the following variables:
```
{env_block}
```

## Running the Application

```bash
# Development
npm run dev

# Production
npm start
```

The API will be available at http://localhost:3000
""",
        docs,
        tests,
        "## API Endpoints\n\n" + "\n".join(endpoints) + "\n",
        "## Generated with BackendIO\n",
    )
