import logging


def setup_loggers(output_dir: str | None, verbose: int) -> logging.Logger:
    """
    Sets up the package logger. With an output directory, INFO goes to info.log
    and, when verbose, DEBUG and higher also go to debug.log. Without one, the
    same levels go to stderr.
    """
    logger = logging.getLogger("capped_multiset")
    logger.setLevel(logging.DEBUG)  # Capture all log levels
    formatter = logging.Formatter("%(message)s")
    logger.handlers.clear()

    if output_dir is None:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.DEBUG if verbose > 0 else logging.INFO)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
        return logger

    # File Handler 1: info.log (Only INFO and higher)
    info_handler = logging.FileHandler(output_dir + "/info.log", mode="w")
    info_handler.setLevel(logging.INFO)
    info_handler.setFormatter(formatter)
    logger.addHandler(info_handler)
    if verbose > 0:
        # File Handler 2: debug.log (DEBUG and higher, including INFO)
        debug_handler = logging.FileHandler(output_dir + "/debug.log", mode="w")
        debug_handler.setLevel(logging.DEBUG)
        debug_handler.setFormatter(formatter)
        logger.addHandler(debug_handler)

    return logger
