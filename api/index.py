"""
Vercel Serverless Function wrapper for the dashboard FastAPI app
"""
import sys
from pathlib import Path

# Add backend to Python path
backend_path = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(backend_path))

from mangum import Mangum

from profile_dashboard.main import app

# Session state lives in memory, so it only survives while the function instance stays warm
mangum_handler = Mangum(app, lifespan="off")


def handler(event, context=None):
    """Vercel serverless function handler"""
    return mangum_handler(event, context)
