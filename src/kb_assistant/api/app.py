"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kb_assistant.api.middleware import RequestContextMiddleware
from kb_assistant.api.routes_chat import router as chat_router
from kb_assistant.config.settings import Settings
from kb_assistant.generation.driver import GenerationDriver
from kb_assistant.generation.gemini_provider import GeminiProvider
from kb_assistant.observability.logger import get_logger, setup_logging
from kb_assistant.pipeline.chat_orchestrator import ChatOrchestrator
from kb_assistant.retrieval.faiss_store import FAISSVectorStore
from kb_assistant.retrieval.openai_embedder import OpenAIEmbedder
from kb_assistant.retrieval.vector_retriever import VectorRetriever
from kb_assistant.strategies.hybrid import HybridStrategy
from kb_assistant.strategies.selector import StrategySelector
from kb_assistant.strategies.strict_kb import StrictKBStrategy

logger = get_logger("app")


def build_orchestrator(settings: Settings) -> tuple[ChatOrchestrator, FAISSVectorStore]:
    """Wire the production collaborators. Raises ConfigurationError on missing credentials."""
    settings.require_credentials()

    # Retrieval
    embedder = OpenAIEmbedder(
        api_key=settings.openai_api_key,
        model=settings.embedding_model,
        dimensions=settings.vector_dimensions,
    )
    vector_store = FAISSVectorStore(
        dimensions=settings.vector_dimensions,
        similarity_metric=settings.similarity_metric,
        index_path=settings.faiss_index_path,
    )
    retriever = VectorRetriever(embedder, vector_store, top_k=settings.retrieval_top_k)

    # Generation
    llm = GeminiProvider(
        api_key=settings.google_api_key,
        model=settings.gemini_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
    driver = GenerationDriver(
        llm,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )

    # Strategies
    thresholds = settings.thresholds()
    selector = StrategySelector(
        strict=StrictKBStrategy(driver, thresholds),
        hybrid=HybridStrategy(driver, thresholds),
    )
    return ChatOrchestrator(retriever, selector), vector_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if app.state.orchestrator is None:
        orchestrator, vector_store = build_orchestrator(settings)
        app.state.orchestrator = orchestrator
        logger.info(
            "startup_complete",
            model=settings.gemini_model,
            index_size=vector_store.size,
            similarity_metric=settings.similarity_metric,
        )
    yield
    logger.info("shutdown_complete")


def create_app(
    settings: Settings | None = None,
    orchestrator: ChatOrchestrator | None = None,
) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Knowledge Base Assistant",
        version="1.0.0",
        description="Retrieval-augmented chat with confidence-based answer strategies",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(chat_router, tags=["chat"])
    return app
