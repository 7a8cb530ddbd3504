from . import sync
from . import utility
