"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.catalog.search import names_only, search
from src.catalog.store import ProductCatalogue, load_catalogue
from src.chatbot.intent_classifier import IntentClassifier
from src.chatbot.router import ChatRouter
from src.error_handler import ChatbotError, ErrorHandler
from src.integrations.clients.gemini import build_delegate
from src.utils.config_loader import load_app_config, resolve_catalog_path, resolve_port

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Product Chatbot API"
VERSION = "1.0.0"

app_cfg = load_app_config()

# Initialize FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Product search and chat backed by a local catalog, with Gemini for everything else",
    version=VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_cfg.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

# Loaded once; shared read-only by every request.
catalogue = load_catalogue(resolve_catalog_path(app_cfg))
chat_router = ChatRouter(IntentClassifier(catalogue), build_delegate(app_cfg.delegate))
error_handler = ErrorHandler()


def get_catalogue() -> ProductCatalogue:
    return catalogue


def get_router() -> ChatRouter:
    return chat_router


# ============================================================================
# REQUEST MODELS
# ============================================================================


class ChatMessage(BaseModel):
    message: Optional[str] = None


# ============================================================================
# ERROR HANDLERS
# ============================================================================


@app.exception_handler(ChatbotError)
async def chatbot_error_handler(request: Request, exc: ChatbotError):
    status_code, payload = error_handler.handle_exception(exc, context={"path": request.url.path})
    return JSONResponse(status_code=status_code, content=payload)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Malformed request", "details": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"service": SERVICE_NAME, "status": "healthy", "version": VERSION, "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(products: ProductCatalogue = Depends(get_catalogue)):
    """Detailed health check (catalog size)."""
    return {"status": "healthy", "products": len(products), "timestamp": datetime.now().isoformat()}


@app.get("/products", tags=["Products"])
async def list_products(
    q: Optional[str] = Query(None, description="Case-insensitive search in name, description and category."),
    names: Optional[str] = Query(None, description="Return only product names when 'true'."),
    products: ProductCatalogue = Depends(get_catalogue),
):
    """
    List products.

    - **q**: filter first (e.g. `?q=jacket`).
    - **names**: `?names=true` projects the (filtered) result to names.
    """
    result = search(products.all(), q)
    if names == "true":
        return names_only(result)
    return [p.to_dict() for p in result]


@app.post("/chat", tags=["Chat"])
async def chat(
    request: Optional[ChatMessage] = None,
    router: ChatRouter = Depends(get_router),
):
    """
    Answer a chat message.

    Product list requests and SKU/id/keyword lookups are answered from the
    catalog as `{reply, products}`; anything else is delegated to Gemini and
    returned as `{reply}`.
    """
    message = (request.message if request is not None else None) or ""
    reply = await router.route(message)
    return reply.to_payload()


def main() -> None:
    port = resolve_port(app_cfg)
    logger.info("Backend running on http://localhost:%d", port)
    uvicorn.run(app, host=app_cfg.server.host, port=port)


if __name__ == "__main__":
    main()
