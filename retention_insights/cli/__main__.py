"""Entry point for: python -m retention_insights.cli"""

import sys
from pathlib import Path

from dotenv import load_dotenv

# OPENAI_API_KEY may live in a .env beside pyproject.toml, two levels above this package
load_dotenv(Path(__file__).resolve().parents[2] / ".env")

from .main import main

sys.exit(main())
