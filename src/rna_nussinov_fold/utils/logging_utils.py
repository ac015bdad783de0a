import logging
import sys
from pathlib import Path
from typing import Optional, Sequence
from datetime import datetime

from tqdm.contrib.logging import logging_redirect_tqdm

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Loggers the command-line front-end configures together.
PACKAGE_LOGGERS: Sequence[str] = (
    "rna_nussinov_fold.structures.rna_sequence",
    "rna_nussinov_fold.folding.nussinov.nussinov_recurrences",
    "rna_nussinov_fold.folding.nussinov.nussinov_traceback",
    "rna_nussinov_fold.folding.nussinov.nussinov_fold",
)


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Generates a standardized file path for a log file.

    This function creates a safe filename from a module name and appends a
    timestamp to ensure uniqueness. It also ensures the target log directory exists.

    Parameters
    ----------
    module_name : str
        The name of the module or logger (e.g., "rna_nussinov_fold.folding").
    log_dir : Optional[Path], optional
        The directory where the log file will be saved. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        If True, a timestamp is added to the filename to prevent overwrites,
        by default True.

    Returns
    -------
    Path
        The full `pathlib.Path` object for the generated log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_dir.mkdir(parents=True, exist_ok=True)

    # Dots would read as file extensions.
    safe_name = module_name.replace(".", "_")

    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configures and returns a logger with console and optional file handlers.

    Any existing handlers are cleared first so repeated calls do not duplicate
    messages. The console handler writes to stdout; the file handler writes to
    `log_file` if given, otherwise to a timestamped file in `log_dir` when
    `enable_file_logging` is set.

    Parameters
    ----------
    name : str
        The name of the logger, typically `__name__`.
    level : int, optional
        The base logging level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        A specific path for the log file. Overrides the automatic path generation.
    log_dir : Optional[Path], optional
        The directory to store the log file if `log_file` is not provided.
    enable_file_logging : bool, optional
        If True and `log_file` is not specified, a default timestamped log file
        is created. By default True.
    console_level : Optional[int], optional
        Override for the console handler level.
    file_level : Optional[int], optional
        Override for the file handler level.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        logger.addHandler(file_handler)

    return logger


def progress_logging(loggers: Sequence[str] = PACKAGE_LOGGERS):
    """
    Context manager that routes the given loggers through `tqdm.write` so log
    lines do not tear an active progress bar.
    """
    return logging_redirect_tqdm(loggers=[logging.getLogger(name) for name in loggers])
