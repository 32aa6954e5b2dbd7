from .option import FOption, EMPTY, ElementMissing
from .stream import FStream, AlreadyClosed, TypeMismatch
from .scope import Scope
from .config import Settings
from .logger import ConsoleLogger, configure, get_logger
