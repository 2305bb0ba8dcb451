# result_predictor/logging_config.py
import logging
import sys

from result_predictor.settings import settings


def setup_logging():
    """
    Set up logging configuration for the application.
    """
    logger = logging.getLogger()
    logger.setLevel(settings.LOG_LEVEL)

    # Only attach the console handler once, even if re-imported
    if not any(
        getattr(handler, "name", None) == "result_predictor"
        for handler in logger.handlers
    ):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name("result_predictor")
        console_handler.setLevel(settings.LOG_LEVEL)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger


# Call the setup function to configure logging
app_logger = setup_logging()
