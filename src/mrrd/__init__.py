from loguru import logger

from mrrd._version import __version__
from mrrd import data, phantoms, utils
from mrrd.create_dataset import DatasetConfig, create_test_dataset

# library code only logs if an application enables it, see mrrd.utils.log.start_log
logger.disable("mrrd")

__all__ = [
    "DatasetConfig",
    "__version__",
    "create_test_dataset",
    "data",
    "phantoms",
    "utils"
]
