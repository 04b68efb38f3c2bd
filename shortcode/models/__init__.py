from .error import *
from .general import *
from .generator import *
from .state import *
