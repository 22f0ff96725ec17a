import uvicorn

from product_api.config import get_config


if __name__ == "__main__":
    config = get_config()
    uvicorn.run(
        "product_api.main:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
    )
