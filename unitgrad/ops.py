from __future__ import annotations
from enum import Enum
from typing import Optional, Union, Type

# unary ops, binary ops, reduce ops. leaves carry no op.
UnaryOps = Enum("UnaryOps",["TANH","EXP","RELU"])
BinaryOps = Enum("BinaryOps",["ADD","MUL"])
ReduceOps = Enum("ReduceOps",["SUM"])

Op = Union[UnaryOps,BinaryOps,ReduceOps]
OpType = Union[Type[UnaryOps],Type[BinaryOps],Type[ReduceOps]]

# display symbol per op, used by viz
SYMBOLS = {
    BinaryOps.ADD: "+", BinaryOps.MUL: "*",
    UnaryOps.TANH: "tanh", UnaryOps.EXP: "exp", UnaryOps.RELU: "relu",
    ReduceOps.SUM: "sum",
}

def op_type(op: Op) -> OpType: return type(op)

# number of operands the op takes, None means variadic (at least one)
def arity(op: Op) -> Optional[int]:
    return {UnaryOps: 1, BinaryOps: 2, ReduceOps: None}[op_type(op)]
