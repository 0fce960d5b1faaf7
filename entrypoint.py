"""Price service entrypoint. Runs uvicorn on BACKEND_HOST/BACKEND_PORT."""
import os
import uvicorn

from wealthdash.config.settings import get_settings
# Imported object rather than "wealthdash.main:app" so a frozen build can find it
from wealthdash.main import app


def main() -> None:
    host = os.environ.get("BACKEND_HOST", "127.0.0.1")
    port = int(os.environ.get("BACKEND_PORT", "8001"))
    uvicorn.run(app, host=host, port=port, log_level=get_settings().log_level.lower())


if __name__ == "__main__":
    main()
