from unitgrad.unit import Unit, Function, new_leaf, apply, seed_root, backward, reset_gradients, trace
from unitgrad.ops import UnaryOps, BinaryOps, ReduceOps
