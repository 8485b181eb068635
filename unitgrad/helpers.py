import os, logging
import functools

# integer switches from the environment, eg: DEBUG=2 python viz.py
@functools.lru_cache(maxsize=None)
def getenv(key:str, default=0): return type(default)(os.getenv(key, default))

DEBUG = getenv("DEBUG")

logger = logging.getLogger("unitgrad")
if DEBUG:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(name)s %(levelname)s: %(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if DEBUG >= 2 else logging.INFO)

# additive and multiplicative identity in the scalar type of x (int, float, np.float32 ...)
def zero_like(x): return type(x)(0)
def one_like(x): return type(x)(1)
