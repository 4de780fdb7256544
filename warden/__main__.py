import os

from dotenv import load_dotenv

from warden.cli.commands import app

# Load .env file from ~/.warden/ if it exists
# Precedence: existing env vars > .env file (override=False)
load_dotenv(os.path.expanduser("~/.warden/.env"), override=False)

if __name__ == "__main__":
    app()
