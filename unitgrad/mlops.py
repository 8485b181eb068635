from __future__ import annotations
import numpy as np
from unitgrad.unit import Function
from unitgrad.ops import UnaryOps, BinaryOps, ReduceOps

# every op is a forward (value formula) and a backward (local gradient rule).
# backward gets the output grad and returns one contribution per parent, the engine accumulates them.

# Unary ops
class Tanh(Function):
    op = UnaryOps.TANH
    def forward(self, x):
        self.ret = np.tanh(x)
        return self.ret
    def backward(self, output_grad):
        return (1 - self.ret * self.ret) * output_grad

class Exp(Function):
    op = UnaryOps.EXP
    def forward(self, x):
        self.ret = np.exp(x)
        return self.ret
    def backward(self, output_grad):
        return self.ret * output_grad

class Relu(Function):
    op = UnaryOps.RELU
    def forward(self, x):
        self.x = x
        return np.maximum(x, 0)
    def backward(self, output_grad):
        return (1 if self.x > 0 else 0) * output_grad

# Binary ops
class Add(Function):
    op = BinaryOps.ADD
    def forward(self, x, y):
        return x + y
    def backward(self, output_grad):
        return 1 * output_grad, 1 * output_grad

class Mul(Function):
    op = BinaryOps.MUL
    def forward(self, x, y):
        self.x, self.y = x, y
        return x * y
    def backward(self, output_grad):
        return self.y * output_grad, self.x * output_grad

# Reduce ops, any number of parents
class Sum(Function):
    op = ReduceOps.SUM
    def forward(self, *x):
        ret = x[0]
        for v in x[1:]: ret = ret + v
        return ret
    def backward(self, output_grad):
        return tuple(1 * output_grad for _ in self.parents)
