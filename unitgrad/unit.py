from __future__ import annotations
import numbers, itertools
import inspect, importlib
import logging
from typing import Optional, Sequence, Dict, Type, Tuple, Set, List
from unitgrad.ops import Op, arity
from unitgrad.helpers import zero_like, one_like

logger = logging.getLogger(__name__)

class Unit:
    _ids = itertools.count()

    def __init__(self, value, label: str = ""):
        if not isinstance(value, numbers.Number):
            raise TypeError(f"Can't create Unit from {value!r}")
        self._value = value
        # d(root)/d(self), only written by the gradient pass
        self.grad = zero_like(value)
        self._ctx: Optional[Function] = None
        self.label = label
        # construction order, stable across runs of the same program
        self.id = next(Unit._ids)

    def __repr__(self):
        return f"<Unit {self.label!r} value={self.value!r} grad={self.grad!r}>"

    # value is fixed at construction
    @property
    def value(self): return self._value

    @property
    def op(self) -> Optional[Op]: return self._ctx.op if self._ctx else None

    @property
    def operands(self) -> Tuple[Unit, ...]: return self._ctx.parents if self._ctx else ()

    def is_leaf(self) -> bool: return self._ctx is None

    # toposort, operands before consumers. iterative so long chains don't hit the recursion limit
    def deepwalk(self) -> List[Unit]:
        visited, nodes = set(), []
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                nodes.append(node)
                continue
            if node in visited:
                continue
            visited.add(node)
            stack.append((node, True))
            # reversed so operands come off the stack in operand order
            stack.extend((child, False) for child in reversed(node.operands) if child not in visited)
        return nodes

    def backward(self):
        """Propagate self.grad to every unit reachable from self.

        The root must be seeded first (see seed_root), nothing is seeded here.
        Gradients are accumulated, so run zero_grad between independent passes.
        """
        topo = self.deepwalk()
        logger.debug("backward over %d units from %r", len(topo), self)
        for node in reversed(topo):  # consumers before operands, so node.grad is complete here
            if node._ctx is None:
                continue
            grads = node._ctx.backward(node.grad)
            grads = [grads] if arity(node._ctx.op) == 1 else grads
            for t, g in zip(node._ctx.parents, grads):
                t.grad += g

    def zero_grad(self):
        topo = self.deepwalk()
        logger.debug("zero grad on %d units from %r", len(topo), self)
        for node in topo:
            node.grad = zero_like(node.value)

    def add(self, x): return self._add.apply(self, _unit(x))
    def mul(self, x): return self._mul.apply(self, _unit(x))
    def tanh(self): return self._tanh.apply(self)
    def exp(self): return self._exp.apply(self)
    def relu(self): return self._relu.apply(self)
    # Unit.sum(a, b, c) or a.sum(b, c)
    def sum(self, *x): return self._sum.apply(self, *[_unit(t) for t in x])

    def __add__(self, x): return self.add(x)
    def __mul__(self, x): return self.mul(x)
    def __radd__(self, x): return self._add.apply(_unit(x), self)
    def __rmul__(self, x): return self._mul.apply(_unit(x), self)
    def __neg__(self): return self * -1
    def __sub__(self, x): return self + (-_unit(x))
    def __rsub__(self, x): return _unit(x) + (-self)

# numbers on either side of an operator become fresh leaves
def _unit(x) -> Unit: return x if isinstance(x, Unit) else Unit(x)

# act as the context of a non leaf unit
class Function:
    op: Op

    def __init__(self, *units: Unit):
        n = arity(self.op)
        if (n is None and len(units) < 1) or (n is not None and len(units) != n):
            raise ValueError(f"{type(self).__name__} takes {'at least 1' if n is None else n} operand(s), got {len(units)}")
        for u in units:
            if not isinstance(u, Unit):
                raise TypeError(f"{type(self).__name__} operand must be a Unit, got {u!r}")
        self.parents: Tuple[Unit, ...] = units

    def forward(self, *x): raise NotImplementedError
    def backward(self, output_grad): raise NotImplementedError

    @classmethod
    def apply(cls, *x: Unit, label: str = "") -> Unit:
        # 1. context checks arity and holds the operands by reference
        ctx = cls(*x)
        # 2. value from the operands' current values
        ret = Unit(ctx.forward(*[t.value for t in x]), label=label)
        # 3. keep the context for backward
        ret._ctx = ctx
        return ret

def new_leaf(value, label: str = "") -> Unit: return Unit(value, label=label)

def apply(op: Op, operands: Sequence[Unit], label: str = "") -> Unit:
    if op not in _functions:
        raise ValueError(f"no Function registered for {op}")
    return _functions[op].apply(*operands, label=label)

def seed_root(root: Unit):
    logger.debug("seeding %r", root)
    root.grad = one_like(root.value)

def backward(root: Unit): root.backward()
def reset_gradients(root: Unit): root.zero_grad()

def trace(root: Unit) -> Tuple[Set[Unit], Set[Tuple[Unit, Unit]]]:
    nodes, edges = set(), set()   # dedup by identity, edges = (operand, consumer)
    stack = [root]
    while stack:
        v = stack.pop()
        if v in nodes:
            continue
        nodes.add(v)
        for child in v.operands:
            edges.add((child, v))
            stack.append(child)
    return nodes, edges

# register all math "ops" from mlops
_functions: Dict[Op, Type[Function]] = {}
def register(name: str, fxn: Type[Function]):
    setattr(Unit, "_"+name if hasattr(Unit, name) else name, fxn)
    _functions[fxn.op] = fxn
for name, cls in inspect.getmembers(importlib.import_module("unitgrad.mlops"), inspect.isclass):
    if issubclass(cls, Function) and cls is not Function:
        register(name.lower(), cls)
