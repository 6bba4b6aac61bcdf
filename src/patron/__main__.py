"""Patronサーバーのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    import uvicorn

    from patron.config import ServerConfig
    from patron.logging_config import configure_logging
    from patron.server import create_app

    config = ServerConfig()
    configure_logging(config)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
