# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit a real .env. This file exists to make the repo self-documenting.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name, also the console title (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for the log file and todos (default: .local/todo).",
    "TODO_TODOS_PATH": "JSON file holding the todo collection (default: <data_dir>/todos.json).",
    # Server
    "TODO_HOST": "Interface the API binds to (default: 127.0.0.1).",
    "TODO_PORT": "API port (default: 4000).",
    "TODO_CORS_ORIGINS": "Comma/space separated allowed origins (default: *).",
    # Client
    "TODO_API_URL": "Server root the console client talks to (default: http://localhost:4000).",
    "TODO_REQUEST_TIMEOUT_SECONDS": "Per-request timeout for the client (default: 10).",
    "TODO_CONSOLE_COLOR": "ANSI colours and strike-through in the console (true/false, default: true).",
}
