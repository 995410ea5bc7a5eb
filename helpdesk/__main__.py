# helpdesk/__main__.py
# Development server; in production run `uvicorn helpdesk.main:app` behind a proxy.
import uvicorn

from helpdesk.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "helpdesk.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
    )
