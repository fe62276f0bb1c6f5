import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src import __version__
from src.api.endpoints import router as api_router
from src.core.upstream_client import UpstreamClient
from src.middleware import RequestSanitizeMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app.state.upstream_client = UpstreamClient.from_config()
    try:
        yield
    finally:
        await app.state.upstream_client.aclose()


def create_app() -> FastAPI:
    app = FastAPI(title="Dialect Sanitizer Proxy", version=__version__, lifespan=lifespan)
    app.add_middleware(RequestSanitizeMiddleware)
    app.include_router(api_router)
    return app


app = create_app()


def main() -> None:
    from src.core.config import config
    from src.core.logging import configure_root_logging

    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print(f"Dialect Sanitizer Proxy v{__version__}")
        print("")
        print("Usage: python -m src.main")
        print("       or: dsp start")
        print("")
        print("Environment variables:")
        print("  UPSTREAM_BASE_URL - Backend base URL (default: http://localhost:8317/v1)")
        print("  UPSTREAM_API_KEY  - Bearer key for the backend (optional)")
        print("  HOST - Server host (default: 0.0.0.0)")
        print("  PORT - Server port (default: 8082)")
        print("  LOG_LEVEL - Logging level (default: INFO)")
        print("  REQUEST_TIMEOUT - Upstream timeout in seconds (default: 90)")
        print("  SANITIZE_ENABLED - Sanitize request bodies (default: true)")
        sys.exit(0)

    log_level = configure_root_logging()

    print(f"🚀 Dialect Sanitizer Proxy v{__version__}")
    print(f"   Upstream: {config.upstream_base_url}")
    print(f"   API Key : {config.api_key_hash}")
    print(f"   Sanitize: {'Enabled' if config.sanitize_enabled else 'Disabled'}")
    print(f"   Server  : {config.host}:{config.port}")
    print("")

    uvicorn.run(
        "src.main:app",
        host=config.host,
        port=config.port,
        log_level=log_level.lower(),
        access_log=log_level == "DEBUG",
        reload=False,
    )


if __name__ == "__main__":
    main()
