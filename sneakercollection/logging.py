import logging
import os
from typing import Optional, Union

from uvicorn.logging import DefaultFormatter

LOG_FORMAT = "%(levelprefix)s %(name)s: %(message)s"
LOG_LEVEL_ENV = "SNEAKERS_LOG_LEVEL"


def get_logger(name: str, log_level: Optional[Union[int, str]] = None) -> logging.Logger:
    """uvicorn 과 같은 형식으로 출력하는 로거를 리턴합니다.

    로그 레벨을 지정하지 않으면 ``SNEAKERS_LOG_LEVEL`` 환경변수를 사용합니다.
    (기본값 ``INFO``) 핸들러는 로거마다 한 번만 추가됩니다.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(log_level or os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
        ch = logging.StreamHandler()
        ch.setFormatter(DefaultFormatter(fmt=LOG_FORMAT))
        logger.addHandler(ch)

    return logger
