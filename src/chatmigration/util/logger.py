import logging
import logging.handlers
import os

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s: %(message)s'


def get_logger(name: str = 'migration',
               log_level: any = logging.INFO,
               save_path: str = None):
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT)

    if not _has_handler(logger, logging.StreamHandler, exact=True):
        logger.addHandler(_get_stream_handler(formatter))

    if save_path is not None and not _has_handler(logger, logging.handlers.TimedRotatingFileHandler):
        _init_path(save_path)
        logger.addHandler(_get_file_handler(save_path, name, formatter))

    return logger


def configure_logger(logger: logging.Logger, log_level: any, save_path: str = None):
    # 설정 파일 로드 이후 모듈 로거에 레벨과 파일 핸들러를 반영
    logger.setLevel(log_level)
    if save_path is not None and not _has_handler(logger, logging.handlers.TimedRotatingFileHandler):
        _init_path(save_path)
        logger.addHandler(_get_file_handler(save_path, logger.name, logging.Formatter(LOG_FORMAT)))

    return logger


def _has_handler(logger: logging.Logger, handler_type: type, exact: bool = False) -> bool:
    for handler in logger.handlers:
        if exact and type(handler) is handler_type:
            return True
        if not exact and isinstance(handler, handler_type):
            return True

    return False


def _get_file_handler(path: str, name: str, formatter):
    file_path = path + '/' + name
    handler = logging.handlers.TimedRotatingFileHandler(filename=file_path, when='midnight',
                                                        interval=1, encoding='utf-8')
    handler.suffix = "%Y%m%d.log"
    handler.setFormatter(formatter)

    return handler


def _get_stream_handler(formatter):
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    return handler


def _init_path(path: str):
    if not os.path.exists(path):
        os.makedirs(path)
