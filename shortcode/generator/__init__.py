from .code_generator import CodeGenerator, compute_modulus
from .errors import *
from .partition import partition
from .router import router
