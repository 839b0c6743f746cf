from . import query
from . import utility
