"""Main entry point for the FastAPI application."""

import uvicorn
# Import all models to ensure they're loaded before app creation
import components.category.models
import components.transaction.models
import components.budget.models
import components.goal.models

from components.core.config import get_settings
from restapi.router import create_app

app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", reload=get_settings().DEBUG)
