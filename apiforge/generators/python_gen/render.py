"""String templates for the Flask (Python) scaffold."""
from typing import List
from apiforge.generators.openapi import render_openapi_json
from apiforge.generators.types import GeneratorOptions
from apiforge.generators.utils import (
    database_title,
    env_value,
    escape_double_quoted,
    join_blocks,
    sqlite_path,
)


def _is_mongo(options: GeneratorOptions) -> bool:
    return options.database.type == "mongodb"


def _database_url(options: GeneratorOptions) -> str:
    """SQLAlchemy URL of the configured database (mongo URIs are returned untouched)."""
    conn = options.database.connection_string
    if options.database.type == "sqlite":
        return "sqlite:///" + sqlite_path(conn)
    if options.database.type == "mysql" and conn.startswith("mysql://"):
        return "mysql+pymysql://" + conn[len("mysql://"):]
    return conn


def render_requirements_txt(options: GeneratorOptions) -> str:
    """Generate requirements.txt content."""
    features = options.features
    requirements = ["Flask==2.0.1", "Flask-Cors==3.0.10", "python-dotenv==0.19.0"]
    if features.jwt:
        requirements.append("PyJWT==2.1.0")
    if features.swagger:
        requirements.append("flask-swagger-ui==3.36.0")

    db_type = options.database.type
    if db_type == "mongodb":
        requirements += ["pymongo==3.12.0", "Flask-PyMongo==2.3.0"]
    else:
        requirements.append("Flask-SQLAlchemy==2.5.1")
        if db_type == "mysql":
            requirements.append("PyMySQL==1.0.2")
        elif db_type == "postgres":
            requirements.append("psycopg2-binary==2.9.1")

    if features.tests:
        requirements += ["pytest==6.2.5", "pytest-flask==1.2.0"]
    return "\n".join(requirements) + "\n"


def render_app_py(options: GeneratorOptions) -> str:
    """Generate app.py content (application factory and blueprint registration)."""
    features = options.features
    imports = [
        "import os",
        "from flask import Flask, jsonify",
        "from flask_cors import CORS",
        "from dotenv import load_dotenv",
    ]
    if features.swagger:
        imports.append("from flask_swagger_ui import get_swaggerui_blueprint")
    imports += ["", "from database import init_db", "from routes.user_routes import user_bp"]
    if features.jwt:
        imports.append("from routes.auth_routes import auth_bp")

    body = [
        "",
        "# Load environment variables",
        "load_dotenv()",
        "",
        "",
        "def create_app():",
        "    app = Flask(__name__)",
        "    CORS(app)",
        "",
        '    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-key")',
        "",
        "    # Initialize database",
        "    init_db(app)",
        "",
    ]
    if features.swagger:
        body += [
            "    # Swagger UI",
            "    swaggerui_blueprint = get_swaggerui_blueprint(",
            '        "/api/docs",',
            '        "/static/swagger.json",',
            '        config={"app_name": "Python API"},',
            "    )",
            '    app.register_blueprint(swaggerui_blueprint, url_prefix="/api/docs")',
            "",
        ]
    body += [
        "    # Register blueprints",
        '    app.register_blueprint(user_bp, url_prefix="/api/users")',
    ]
    if features.jwt:
        body.append('    app.register_blueprint(auth_bp, url_prefix="/api/auth")')
    body += [
        "",
        '    @app.route("/")',
        "    def home():",
        '        return jsonify({"message": "Welcome to the Python API generated with BackendIO"})',
        "",
        "    return app",
        "",
        "",
        "app = create_app()",
        "",
        'if __name__ == "__main__":',
        '    port = int(os.getenv("PORT", 5000))',
        '    app.run(host="0.0.0.0", port=port, debug=True)',
    ]
    return "\n".join(imports + body) + "\n"


def render_database_py(options: GeneratorOptions) -> str:
    """Generate database.py content."""
    if _is_mongo(options):
        default = escape_double_quoted(options.database.connection_string)
        return f"""import os
from flask_pymongo import PyMongo

mongo = PyMongo()


def init_db(app):
    app.config["MONGO_URI"] = os.getenv("MONGO_URI", "{default}")
    mongo.init_app(app)
    print("Connected to MongoDB")
"""
    default = escape_double_quoted(_database_url(options))
    return f"""import os
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def init_db(app):
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "{default}")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    db.init_app(app)
    print("Connected to {database_title(options.database.type)}")

    # Create tables
    with app.app_context():
        import models  # noqa: F401
        db.create_all()
"""


def render_models_py(options: GeneratorOptions) -> str:
    """Generate models.py content."""
    if _is_mongo(options):
        return """from bson import ObjectId


class User:
    def __init__(self, username, email, password=None, _id=None):
        self.username = username
        self.email = email
        self.password = password
        self._id = _id or ObjectId()

    @staticmethod
    def from_mongo(mongo_doc):
        if not mongo_doc:
            return None
        return User(
            username=mongo_doc.get("username"),
            email=mongo_doc.get("email"),
            password=mongo_doc.get("password"),
            _id=mongo_doc.get("_id"),
        )

    def to_json(self):
        return {
            "_id": str(self._id),
            "username": self.username,
            "email": self.email,
        }
"""
    password = (
        "    password = db.Column(db.String(255), nullable=False)\n" if options.features.jwt else ""
    )
    return f"""from datetime import datetime
from database import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
{password}    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User {{self.username}}>"

    def to_json(self):
        return {{
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }}
"""


def render_auth_py() -> str:
    """Generate auth.py content: password hashing, tokens and the route guard."""
    return """import datetime
import os
from functools import wraps

import jwt
from flask import jsonify, request
from werkzeug.security import check_password_hash, generate_password_hash

JWT_SECRET = os.getenv("JWT_SECRET_KEY", "dev-jwt-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_IN = 3600  # seconds


def hash_password(password):
    return generate_password_hash(password)


def check_password(hashed_password, password):
    return check_password_hash(hashed_password, password)


def generate_token(user_id):
    now = datetime.datetime.utcnow()
    payload = {
        "exp": now + datetime.timedelta(seconds=JWT_EXPIRES_IN),
        "iat": now,
        "sub": str(user_id),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token):
    \"\"\"Return the user id stored in the token; raises jwt.InvalidTokenError.\"\"\"
    payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    return payload["sub"]


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        parts = header.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            return jsonify({"error": "Token is missing"}), 401

        try:
            user_id = decode_token(parts[1])
        except jwt.ExpiredSignatureError:
            return jsonify({"error": "Token expired. Please log in again."}), 401
        except jwt.InvalidTokenError:
            return jsonify({"error": "Invalid token. Please log in again."}), 401

        return f(user_id, *args, **kwargs)

    return decorated
"""


def render_auth_routes_py(options: GeneratorOptions) -> str:
    """Generate routes/auth_routes.py content."""
    if _is_mongo(options):
        return """import datetime
from flask import Blueprint, jsonify, request

from auth import check_password, generate_token, hash_password
from database import mongo

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json() or {}

    if not data.get("username") or not data.get("email") or not data.get("password"):
        return jsonify({"error": "Missing required fields"}), 400

    if mongo.db.users.find_one({"email": data["email"]}):
        return jsonify({"error": "User already exists"}), 400

    mongo.db.users.insert_one({
        "username": data["username"],
        "email": data["email"],
        "password": hash_password(data["password"]),
        "created_at": datetime.datetime.utcnow(),
    })

    return jsonify({"message": "User created successfully"}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json() or {}

    if not data.get("email") or not data.get("password"):
        return jsonify({"error": "Missing email or password"}), 400

    user = mongo.db.users.find_one({"email": data["email"]})
    if not user or not check_password(user["password"], data["password"]):
        return jsonify({"error": "Invalid credentials"}), 401

    token = generate_token(str(user["_id"]))
    return jsonify({
        "token": token,
        "user": {
            "id": str(user["_id"]),
            "username": user["username"],
            "email": user["email"],
        },
    })
"""
    return """from flask import Blueprint, jsonify, request

from auth import check_password, generate_token, hash_password
from database import db
from models import User

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json() or {}

    if not data.get("username") or not data.get("email") or not data.get("password"):
        return jsonify({"error": "Missing required fields"}), 400

    if User.query.filter_by(email=data["email"]).first():
        return jsonify({"error": "User already exists"}), 400

    user = User(
        username=data["username"],
        email=data["email"],
        password=hash_password(data["password"]),
    )
    db.session.add(user)
    db.session.commit()

    return jsonify({"message": "User created successfully"}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json() or {}

    if not data.get("email") or not data.get("password"):
        return jsonify({"error": "Missing email or password"}), 400

    user = User.query.filter_by(email=data["email"]).first()
    if not user or not check_password(user.password, data["password"]):
        return jsonify({"error": "Invalid credentials"}), 401

    token = generate_token(user.id)
    return jsonify({"token": token, "user": user.to_json()})
"""


def _guarded(options: GeneratorOptions, route: str, name: str, params: str) -> List[str]:
    """Route decorator lines and signature, with the token guard when JWT is enabled."""
    lines = [f"@user_bp.route({route})"]
    if options.features.jwt:
        lines.append("@token_required")
        params = "current_user_id" + (", " + params if params else "")
    lines.append(f"def {name}({params}):")
    return lines


def render_user_routes_py(options: GeneratorOptions) -> str:
    """Generate routes/user_routes.py content (CRUD handlers for users)."""
    jwt_import = "from auth import token_required\n" if options.features.jwt else ""
    if _is_mongo(options):
        header = f"""from bson.errors import InvalidId
from bson.objectid import ObjectId
from flask import Blueprint, jsonify, request

{jwt_import}from database import mongo

user_bp = Blueprint("user", __name__)


def _serialize(user):
    user["_id"] = str(user["_id"])
    return user
"""
        list_body = """    users = mongo.db.users.find({}, {"password": 0})
    return jsonify([_serialize(user) for user in users])"""
        create_body = """    data = request.get_json() or {}
    if not data.get("username") or not data.get("email"):
        return jsonify({"error": "Missing required fields"}), 400

    user = {"username": data["username"], "email": data["email"]}
    user_id = mongo.db.users.insert_one(user).inserted_id
    return jsonify({"_id": str(user_id), "username": user["username"], "email": user["email"]}), 201"""
        get_body = """    try:
        user = mongo.db.users.find_one({"_id": ObjectId(id)}, {"password": 0})
    except InvalidId:
        return jsonify({"error": "Invalid user ID"}), 400
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify(_serialize(user))"""
        update_body = """    data = request.get_json() or {}
    try:
        user = mongo.db.users.find_one({"_id": ObjectId(id)})
    except InvalidId:
        return jsonify({"error": "Invalid user ID"}), 400
    if not user:
        return jsonify({"error": "User not found"}), 404

    mongo.db.users.update_one(
        {"_id": user["_id"]},
        {"$set": {
            "username": data.get("username", user["username"]),
            "email": data.get("email", user["email"]),
        }},
    )
    return jsonify({"message": "User updated successfully"})"""
        delete_body = """    try:
        result = mongo.db.users.delete_one({"_id": ObjectId(id)})
    except InvalidId:
        return jsonify({"error": "Invalid user ID"}), 400
    if result.deleted_count == 0:
        return jsonify({"error": "User not found"}), 404
    return jsonify({"message": "User deleted successfully"})"""
        item_route = '"/<id>"'
    else:
        header = f"""from flask import Blueprint, jsonify, request

{jwt_import}from database import db
from models import User

user_bp = Blueprint("user", __name__)
"""
        list_body = """    users = User.query.all()
    return jsonify([user.to_json() for user in users])"""
        password = ""
        if options.features.jwt:
            password = """
    if not data.get("password"):
        return jsonify({"error": "Missing required fields"}), 400"""
        create_fields = "username=data[\"username\"], email=data[\"email\"]"
        if options.features.jwt:
            create_fields += ", password=hash_password(data[\"password\"])"
            header = header.replace(
                "from auth import token_required\n", "from auth import hash_password, token_required\n"
            )
        create_body = f"""    data = request.get_json() or {{}}
    if not data.get("username") or not data.get("email"):
        return jsonify({{"error": "Missing required fields"}}), 400{password}

    user = User({create_fields})
    db.session.add(user)
    db.session.commit()
    return jsonify(user.to_json()), 201"""
        get_body = """    user = db.session.get(User, id)
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify(user.to_json())"""
        update_body = """    user = db.session.get(User, id)
    if not user:
        return jsonify({"error": "User not found"}), 404

    data = request.get_json() or {}
    if "username" in data:
        user.username = data["username"]
    if "email" in data:
        user.email = data["email"]
    db.session.commit()
    return jsonify(user.to_json())"""
        delete_body = """    user = db.session.get(User, id)
    if not user:
        return jsonify({"error": "User not found"}), 404

    db.session.delete(user)
    db.session.commit()
    return jsonify({"message": "User deleted successfully"})"""
        item_route = '"/<int:id>"'

    handlers = [
        (f'"/", methods=["GET"]', "get_users", "", list_body),
        (f'"/", methods=["POST"]', "create_user", "", create_body),
        (f'{item_route}, methods=["GET"]', "get_user", "id", get_body),
        (f'{item_route}, methods=["PUT"]', "update_user", "id", update_body),
        (f'{item_route}, methods=["DELETE"]', "delete_user", "id", delete_body),
    ]
    blocks = [
        "\n".join(_guarded(options, route, name, params)) + "\n" + body
        for route, name, params, body in handlers
    ]
    return header + "\n\n" + "\n\n\n".join(blocks) + "\n"


def render_swagger_json(options: GeneratorOptions) -> str:
    """Generate static/swagger.json, served to the Swagger UI blueprint."""
    id_type = "string" if _is_mongo(options) else "integer"
    return render_openapi_json("Python API", "http://localhost:5000", options.features, id_type)


def render_test_app_py(options: GeneratorOptions) -> str:
    """Generate tests/test_app.py content."""
    protected = "401" if options.features.jwt else "200"
    swagger = ""
    if options.features.swagger:
        swagger = """

def test_swagger_document(client):
    response = client.get("/static/swagger.json")
    assert response.status_code == 200
    assert response.get_json()["openapi"].startswith("3.")
"""
    return f"""import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import app as flask_app  # noqa: E402


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    return flask_app


def test_home(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.get_json()


def test_list_users(client):
    response = client.get("/api/users/")
    assert response.status_code == {protected}


def test_unknown_route(client):
    response = client.get("/api/unknown")
    assert response.status_code == 404
{swagger}"""


def env_lines(options: GeneratorOptions) -> List[str]:
    """Environment variables shared by .env and the README."""
    lines = ["PORT=5000", "SECRET_KEY=your_secret_key"]
    if options.features.jwt:
        lines.append("JWT_SECRET_KEY=your_jwt_secret_key")
    if _is_mongo(options):
        lines.append(f"MONGO_URI={env_value(options.database.connection_string)}")
    else:
        lines.append(f"DATABASE_URL={env_value(_database_url(options))}")
    return lines


def render_env(options: GeneratorOptions) -> str:
    """Generate .env content."""
    return "# Environment variables\n" + "\n".join(env_lines(options)) + "\n"


def render_readme(options: GeneratorOptions) -> str:
    """Generate README.md content."""
    features = options.features
    db_name = database_title(options.database.type)

    feature_lines = ["- Flask REST API"]
    if features.jwt:
        feature_lines.append("- JWT Authentication")
    if features.crud:
        feature_lines.append("- CRUD Operations")
    if features.swagger:
        feature_lines.append("- Swagger Documentation")
    if features.tests:
        feature_lines.append("- Unit Tests")
    feature_lines.append(f"- {db_name} Database")

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
        "## API Documentation\n\nSwagger documentation is available at http://localhost:5000/api/docs\n"
        if features.swagger else ""
    )
    tests = "## Running Tests\n\n```bash\npytest\n```\n" if features.tests else ""
    env_block = "\n".join(env_lines(options))

    return join_blocks(
        f"""# Python API

This project was generated with BackendIO.

## Features

{chr(10).join(feature_lines)}

## Requirements

- Python {options.version}
- pip

## Installation

1. Create a virtual environment:
```bash
python -m venv venv
source venv/bin/activate  # On Windows: venv\\Scripts\\activate
```

2. Install dependencies:
```bash
pip install -r requirements.txt
```

3. Set up environment variables:
Create a .env file with the following variables:
```
{env_block}
```

## Running the Application

```bash
python app.py
```

The API will be available at http://localhost:5000
""",
        docs,
        tests,
        "## API Endpoints\n\n" + "\n".join(endpoints) + "\n",
        "## Generated with BackendIO\n",
    )
