import uvicorn

from amadeus_mcp.config import Config, setup_logging
from amadeus_mcp.main import build_app

setup_logging(Config.LOG_LEVEL)
Config.validate()

app = build_app()

if __name__ == "__main__":
    uvicorn.run("web_server:app", host="0.0.0.0", port=Config.PORT, log_config=None)
