"""
ASGI entrypoint for the Storefront API.

    uvicorn storefront.main:app --reload
"""

from dotenv import load_dotenv
load_dotenv()

from .logging_config import setup_logging  # noqa: E402
from .app_factory import create_app  # noqa: E402

setup_logging()

app = create_app()
