"""String templates for the Slim + Eloquent (PHP) scaffold."""
from typing import Dict, List
from apiforge.generators.openapi import render_openapi_json
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import (
    database_title,
    env_value,
    join_blocks,
    parse_sql_url,
    sqlite_path,
    to_json,
    version_number,
)

ELOQUENT_DRIVERS = {"mysql": "mysql", "postgres": "pgsql", "sqlite": "sqlite"}
DEFAULT_PORTS = {"mysql": "3306", "postgres": "5432"}


def _php_literal(value: str) -> str:
    """Escape a value for a single-quoted PHP string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _json_response(body: str, status: str = "") -> List[str]:
    with_status = f"->withStatus({status})" if status else ""
    return [
        f"        $response->getBody()->write(json_encode({body}));",
        f"        return $response{with_status}->withHeader('Content-Type', 'application/json');",
    ]


def _connection_settings(options: GeneratorOptions) -> Dict[str, str]:
    """Eloquent connection values derived from the connection string."""
    db_type = options.database.type
    if db_type == "sqlite":
        return {"database": sqlite_path(options.database.connection_string)}
    parts = parse_sql_url(options.database.connection_string)
    return {
        "host": parts["host"] or "localhost",
        "port": parts["port"] or DEFAULT_PORTS.get(db_type, "3306"),
        "database": parts["name"] or "myapp",
        "username": parts["user"] or "root",
        "password": parts["password"] or "",
    }


def render_composer_json(options: GeneratorOptions) -> str:
    """Generate composer.json content."""
    features = options.features
    require = {
        "php": ">=" + version_number(options.version, "8.2"),
        "slim/slim": "^4.9",
        "slim/psr7": "^1.5",
        "php-di/php-di": "^6.3",
        "vlucas/phpdotenv": "^5.3",
        "illuminate/database": "^8.0",
    }
    if features.jwt:
        require["firebase/php-jwt"] = "^5.4"
    if features.swagger:
        require["zircote/swagger-php"] = "^3.2"

    require_dev = {}
    scripts = {"start": "php -S localhost:8000 -t public"}
    if features.tests:
        require_dev["phpunit/phpunit"] = "^9.5"
        scripts["test"] = "phpunit"

    return to_json({
        "name": "backend-io/php-api",
        "description": "PHP API generated with BackendIO",
        "type": "project",
        "require": require,
        "require-dev": require_dev,
        "autoload": {"psr-4": {"App\\": "app/"}},
        "scripts": scripts,
    })


def render_index_php() -> str:
    """Generate public/index.php content."""
    return """<?php
declare(strict_types=1);

use DI\\ContainerBuilder;
use Slim\\Factory\\AppFactory;

require __DIR__ . '/../vendor/autoload.php';

// Load environment variables
$dotenv = Dotenv\\Dotenv::createImmutable(__DIR__ . '/..');
$dotenv->safeLoad();

// Database connection
require __DIR__ . '/../bootstrap/app.php';

// Set up dependencies
$containerBuilder = new ContainerBuilder();
$container = $containerBuilder->build();

// Create app
$app = AppFactory::createFromContainer($container);
$app->addBodyParsingMiddleware();

// Add error middleware
$app->addErrorMiddleware(true, true, true);

// Register routes
require __DIR__ . '/../app/routes.php';

// Run app
$app->run();
"""


def render_htaccess() -> str:
    return """RewriteEngine On
RewriteCond %{REQUEST_FILENAME} !-f
RewriteCond %{REQUEST_FILENAME} !-d
RewriteRule ^ index.php [QSA,L]
"""


def render_database_config(options: GeneratorOptions) -> str:
    """Generate config/database.php content."""
    db_type = options.database.type
    settings = _connection_settings(options)
    lines = [f"    'driver' => '{ELOQUENT_DRIVERS[db_type]}',"]
    if db_type == "sqlite":
        lines.append(f"    'database' => $_ENV['DB_DATABASE'] ?? '{_php_literal(settings['database'])}',")
    else:
        lines += [
            f"    'host' => $_ENV['DB_HOST'] ?? '{_php_literal(settings['host'])}',",
            f"    'port' => $_ENV['DB_PORT'] ?? '{_php_literal(settings['port'])}',",
            f"    'database' => $_ENV['DB_DATABASE'] ?? '{_php_literal(settings['database'])}',",
            f"    'username' => $_ENV['DB_USERNAME'] ?? '{_php_literal(settings['username'])}',",
            f"    'password' => $_ENV['DB_PASSWORD'] ?? '{_php_literal(settings['password'])}',",
        ]
    if db_type == "mysql":
        lines += ["    'charset' => 'utf8mb4',", "    'collation' => 'utf8mb4_unicode_ci',"]
    elif db_type == "postgres":
        lines.append("    'charset' => 'utf8',")
    lines.append("    'prefix' => '',")
    return "<?php\ndeclare(strict_types=1);\n\nreturn [\n" + "\n".join(lines) + "\n];\n"


def render_jwt_config() -> str:
    return """<?php
declare(strict_types=1);

return [
    'secret' => $_ENV['JWT_SECRET'] ?? 'your-secret-key',
    'algorithm' => 'HS256',
    'expires' => 3600, // seconds
];
"""


def render_bootstrap_app(options: GeneratorOptions) -> str:
    """Generate bootstrap/app.php content (Eloquent setup and users table)."""
    password = "        $table->string('password');\n" if options.features.jwt else ""
    return f"""<?php
declare(strict_types=1);

use Illuminate\\Database\\Capsule\\Manager as Capsule;

$capsule = new Capsule;
$capsule->addConnection(require __DIR__ . '/../config/database.php');

// Make this Capsule instance available globally
$capsule->setAsGlobal();

// Setup the Eloquent ORM
$capsule->bootEloquent();

// Create tables if they don't exist
if (!Capsule::schema()->hasTable('users')) {{
    Capsule::schema()->create('users', function ($table) {{
        $table->increments('id');
        $table->string('username')->unique();
        $table->string('email')->unique();
{password}        $table->timestamps();
    }});
}}
"""


def render_user_controller(options: GeneratorOptions) -> str:
    """Generate app/Controllers/UserController.php content."""
    not_found = [
        "        if (!$user) {",
        "    " + _json_response("['error' => 'User not found']", "404")[0],
        "    " + _json_response("['error' => 'User not found']", "404")[1],
        "        }",
    ]
    create_password = ""
    required = "!isset($data['username']) || !isset($data['email'])"
    if options.features.jwt:
        required += " || !isset($data['password'])"
        create_password = "        $user->password = password_hash($data['password'], PASSWORD_DEFAULT);\n"

    methods = [
        "\n".join([
            "    public function getAll(Request $request, Response $response): Response",
            "    {",
            "        $users = User::all();",
            *_json_response("$users"),
            "    }",
        ]),
        "\n".join([
            "    public function create(Request $request, Response $response): Response",
            "    {",
            "        $data = (array) $request->getParsedBody();",
            "",
            f"        if ({required}) {{",
            "    " + _json_response("['error' => 'Missing required fields']", "400")[0],
            "    " + _json_response("['error' => 'Missing required fields']", "400")[1],
            "        }",
            "",
            "        $user = new User();",
            "        $user->username = $data['username'];",
            "        $user->email = $data['email'];",
            create_password + "        $user->save();",
            "",
            *_json_response("$user", "201"),
            "    }",
        ]),
        "\n".join([
            "    public function getOne(Request $request, Response $response, array $args): Response",
            "    {",
            "        $user = User::find((int) $args['id']);",
            "",
            *not_found,
            "",
            *_json_response("$user"),
            "    }",
        ]),
        "\n".join([
            "    public function update(Request $request, Response $response, array $args): Response",
            "    {",
            "        $user = User::find((int) $args['id']);",
            "",
            *not_found,
            "",
            "        $data = (array) $request->getParsedBody();",
            "        if (isset($data['username'])) {",
            "            $user->username = $data['username'];",
            "        }",
            "        if (isset($data['email'])) {",
            "            $user->email = $data['email'];",
            "        }",
            "        $user->save();",
            "",
            *_json_response("$user"),
            "    }",
        ]),
        "\n".join([
            "    public function delete(Request $request, Response $response, array $args): Response",
            "    {",
            "        $user = User::find((int) $args['id']);",
            "",
            *not_found,
            "",
            "        $user->delete();",
            "",
            *_json_response("['message' => 'User deleted successfully']"),
            "    }",
        ]),
    ]
    return """<?php
declare(strict_types=1);

namespace App\\Controllers;

use App\\Models\\User;
use Psr\\Http\\Message\\ResponseInterface as Response;
use Psr\\Http\\Message\\ServerRequestInterface as Request;

class UserController
{
""" + "\n\n".join(methods) + "\n}\n"


def render_auth_controller() -> str:
    """Generate app/Controllers/AuthController.php content."""
    return """<?php
declare(strict_types=1);

namespace App\\Controllers;

use App\\Models\\User;
use Firebase\\JWT\\JWT;
use Psr\\Http\\Message\\ResponseInterface as Response;
use Psr\\Http\\Message\\ServerRequestInterface as Request;

class AuthController
{
    public function register(Request $request, Response $response): Response
    {
        $data = (array) $request->getParsedBody();

        if (!isset($data['username']) || !isset($data['email']) || !isset($data['password'])) {
            $response->getBody()->write(json_encode(['error' => 'Missing required fields']));
            return $response->withStatus(400)->withHeader('Content-Type', 'application/json');
        }

        if (User::where('email', $data['email'])->first()) {
            $response->getBody()->write(json_encode(['error' => 'User already exists']));
            return $response->withStatus(400)->withHeader('Content-Type', 'application/json');
        }

        $user = new User();
        $user->username = $data['username'];
        $user->email = $data['email'];
        $user->password = password_hash($data['password'], PASSWORD_DEFAULT);
        $user->save();

        $response->getBody()->write(json_encode(['message' => 'User created successfully']));
        return $response->withStatus(201)->withHeader('Content-Type', 'application/json');
    }

    public function login(Request $request, Response $response): Response
    {
        $data = (array) $request->getParsedBody();

        if (!isset($data['email']) || !isset($data['password'])) {
            $response->getBody()->write(json_encode(['error' => 'Missing email or password']));
            return $response->withStatus(400)->withHeader('Content-Type', 'application/json');
        }

        $user = User::where('email', $data['email'])->first();
        if (!$user || !password_verify($data['password'], $user->password)) {
            $response->getBody()->write(json_encode(['error' => 'Invalid credentials']));
            return $response->withStatus(401)->withHeader('Content-Type', 'application/json');
        }

        $jwtConfig = require __DIR__ . '/../../config/jwt.php';
        $payload = [
            'iss' => 'backend-io',
            'sub' => $user->id,
            'iat' => time(),
            'exp' => time() + $jwtConfig['expires'],
        ];
        $token = JWT::encode($payload, $jwtConfig['secret'], $jwtConfig['algorithm']);

        $response->getBody()->write(json_encode(['token' => $token, 'user' => $user]));
        return $response->withHeader('Content-Type', 'application/json');
    }
}
"""


def render_user_model(options: GeneratorOptions) -> str:
    """Generate app/Models/User.php content."""
    fillable = "['username', 'email', 'password']" if options.features.jwt else "['username', 'email']"
    hidden = "\n\n    protected $hidden = ['password'];" if options.features.jwt else ""
    return f"""<?php
declare(strict_types=1);

namespace App\\Models;

use Illuminate\\Database\\Eloquent\\Model;

class User extends Model
{{
    protected $table = 'users';

    protected $fillable = {fillable};{hidden}
}}
"""


def render_jwt_middleware() -> str:
    """Generate app/Middleware/JwtMiddleware.php content."""
    return """<?php
declare(strict_types=1);

namespace App\\Middleware;

use Firebase\\JWT\\ExpiredException;
use Firebase\\JWT\\JWT;
use Psr\\Http\\Message\\ResponseInterface as Response;
use Psr\\Http\\Message\\ServerRequestInterface as Request;
use Psr\\Http\\Server\\MiddlewareInterface;
use Psr\\Http\\Server\\RequestHandlerInterface as RequestHandler;
use Slim\\Psr7\\Response as SlimResponse;

class JwtMiddleware implements MiddlewareInterface
{
    public function process(Request $request, RequestHandler $handler): Response
    {
        $header = $request->getHeaderLine('Authorization');
        if (!preg_match('/^Bearer\\s+(\\S+)$/', $header, $matches)) {
            return $this->unauthorized('Token is missing');
        }

        $jwtConfig = require __DIR__ . '/../../config/jwt.php';

        try {
            $decoded = JWT::decode($matches[1], $jwtConfig['secret'], [$jwtConfig['algorithm']]);
        } catch (ExpiredException $e) {
            return $this->unauthorized('Token expired');
        } catch (\\Exception $e) {
            return $this->unauthorized('Invalid token');
        }

        return $handler->handle($request->withAttribute('user_id', $decoded->sub));
    }

    private function unauthorized(string $message): Response
    {
        $response = new SlimResponse();
        $response->getBody()->write(json_encode(['error' => $message]));
        return $response->withStatus(401)->withHeader('Content-Type', 'application/json');
    }
}
"""


def render_routes(options: GeneratorOptions) -> str:
    """Generate app/routes.php content."""
    features = options.features
    uses = ["use App\\Controllers\\UserController;"]
    if features.jwt:
        uses += ["use App\\Controllers\\AuthController;", "use App\\Middleware\\JwtMiddleware;"]
    uses.append("use Slim\\Routing\\RouteCollectorProxy;")

    guard = "->add(new JwtMiddleware())" if features.jwt else ""
    blocks = [
        "<?php\ndeclare(strict_types=1);\n\n" + "\n".join(uses) + "\n",
        """$app->get('/', function ($request, $response) {
    $response->getBody()->write(json_encode([
        'message' => 'Welcome to the PHP API generated with BackendIO'
    ]));
    return $response->withHeader('Content-Type', 'application/json');
});
""",
        f"""// User routes
$app->group('/api/users', function (RouteCollectorProxy $group) {{
    $group->get('', [UserController::class, 'getAll']);
    $group->post('', [UserController::class, 'create']);
    $group->get('/{{id}}', [UserController::class, 'getOne']);
    $group->put('/{{id}}', [UserController::class, 'update']);
    $group->delete('/{{id}}', [UserController::class, 'delete']);
}}){guard};
""",
    ]
    if features.jwt:
        blocks.append("""// Auth routes
$app->group('/api/auth', function (RouteCollectorProxy $group) {
    $group->post('/register', [AuthController::class, 'register']);
    $group->post('/login', [AuthController::class, 'login']);
});
""")
    if features.swagger:
        blocks.append("""// API documentation
$app->get('/api/docs', function ($request, $response) {
    $response->getBody()->write(file_get_contents(__DIR__ . '/../public/openapi.json'));
    return $response->withHeader('Content-Type', 'application/json');
});
""")
    return "\n".join(blocks)


def render_openapi(options: GeneratorOptions) -> str:
    """Generate public/openapi.json, returned by the /api/docs route."""
    return render_openapi_json("PHP API", "http://localhost:8000", options.features, "integer")


def render_phpunit_xml() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<phpunit bootstrap="vendor/autoload.php" colors="true">
    <testsuites>
        <testsuite name="Application">
            <directory>tests</directory>
        </testsuite>
    </testsuites>
</phpunit>
"""


def render_user_controller_test(options: GeneratorOptions) -> str:
    """Generate tests/UserControllerTest.php content."""
    hidden_test = ""
    if options.features.jwt:
        hidden_test = """

    public function testPasswordIsHiddenFromJson(): void
    {
        $user = new User(['username' => 'alice', 'email' => 'alice@example.com', 'password' => 'secret']);

        $this->assertArrayNotHasKey('password', $user->toArray());
    }"""
    return f"""<?php
declare(strict_types=1);

namespace Tests;

use App\\Controllers\\UserController;
use App\\Models\\User;
use PHPUnit\\Framework\\TestCase;

class UserControllerTest extends TestCase
{{
    public function testUserAttributesAreFillable(): void
    {{
        $user = new User(['username' => 'alice', 'email' => 'alice@example.com']);

        $this->assertSame('alice', $user->username);
        $this->assertSame('alice@example.com', $user->email);
    }}{hidden_test}

    public function testControllerExposesCrudActions(): void
    {{
        foreach (['getAll', 'create', 'getOne', 'update', 'delete'] as $action) {{
            $this->assertTrue(method_exists(UserController::class, $action));
        }}
    }}
}}
"""


def env_lines(options: GeneratorOptions) -> List[str]:
    """Environment variables shared by .env and the README."""
    settings = _connection_settings(options)
    lines = ["APP_ENV=development", "APP_DEBUG=true"]
    if options.database.type == "sqlite":
        lines.append(f"DB_DATABASE={env_value(settings['database'])}")
    else:
        lines += [
            f"DB_HOST={env_value(settings['host'])}",
            f"DB_PORT={settings['port']}",
            f"DB_DATABASE={env_value(settings['database'])}",
            f"DB_USERNAME={env_value(settings['username'])}",
            f"DB_PASSWORD={env_value(settings['password'])}",
        ]
    if options.features.jwt:
        lines.append("JWT_SECRET=your_jwt_secret_key")
    return lines


def render_env(options: GeneratorOptions) -> str:
    """Generate .env content."""
    return "# Environment variables\n" + "\n".join(env_lines(options)) + "\n"


def render_readme(options: GeneratorOptions) -> str:
    """Generate README.md content."""
    features = options.features
    db_name = database_title(options.database.type)

    feature_lines = ["- Slim Framework REST API"]
    if features.jwt:
        feature_lines.append("- JWT Authentication")
    if features.crud:
        feature_lines.append("- CRUD Operations")
    if features.swagger:
        feature_lines.append("- Swagger Documentation")
    if features.tests:
        feature_lines.append("- Unit Tests")
    feature_lines.append(f"- {db_name} Database with Eloquent ORM")

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

    docs = (
        "## API Documentation\n\nThe OpenAPI (Swagger) document is available at http://localhost:8000/api/docs\n"
        if features.swagger else ""
    )
    tests = "## Running Tests\n\n```bash\nvendor/bin/phpunit\n```\n" if features.tests else ""
    env_block = "\n".join(env_lines(options))

    return join_blocks(
        f"""# PHP API

This project was generated with BackendIO.

## Features

{chr(10).join(feature_lines)}

## Requirements

- PHP {options.version}
- Composer

## Installation

1. Install dependencies:
```bash
composer install
```

2. Set up environment variables:
Create a .env file with the following variables:
```
{env_block}
```

## Running the Application

```bash
composer start
```

The API will be available at http://localhost:8000
""",
        docs,
        tests,
        "## API Endpoints\n\n" + "\n".join(endpoints) + "\n",
        "## Generated with BackendIO\n",
    )
