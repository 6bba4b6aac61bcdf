"""ロギング設定。"""

import logging

from patron.config import ServerConfig


def configure_logging(config: ServerConfig) -> None:
    """ルートロガーを設定値に従って構成する。"""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
