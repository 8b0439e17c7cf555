from __future__ import annotations

import uvicorn
from dotenv import find_dotenv, load_dotenv

from core.config import get_settings
from core.logging import get_logger

logger = get_logger("api.main")


def main() -> None:
    # .env prima di leggere Settings; le variabili già esportate hanno la precedenza
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)
    settings = get_settings()
    logger.info("Server in ascolto sulla porta %s", settings.port)
    uvicorn.run("api.app:app", host="0.0.0.0", port=settings.port, reload=False)


# Avvio rapido: python -m api
if __name__ == "__main__":
    main()
