"""Project-level settings shared by the jobs and scripts."""

import os
from pathlib import Path
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent

# .env at the project root; variables already set in the environment take precedence
load_dotenv(PROJECT_ROOT / ".env")

ENV = os.environ.get("ENV", "local")
