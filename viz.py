from graphviz import Digraph
from unitgrad.unit import Unit, trace
from unitgrad.ops import SYMBOLS

def draw_dot(root: Unit, format='svg', rankdir='LR'):
    assert rankdir in ['LR', 'TB']
    nodes, edges = trace(root)

    dot = Digraph(format=format, graph_attr={'rankdir': rankdir})

    # unit nodes
    for node in sorted(nodes, key=lambda n: n.id):
        uid = str(node.id)
        dot.node(name=uid, label=f"{{ {node.label} | value {node.value:.4f} | grad {node.grad:.4f} }}", shape="record")

        # op node
        if node.op is not None:
            op_id = f"{uid}_{node.op.name}"
            dot.node(name=op_id, label=SYMBOLS[node.op], shape='ellipse')
            dot.edge(op_id, uid)

    # edges (operand unit -> op)
    for p, c in sorted(edges, key=lambda e: (e[0].id, e[1].id)):
        dot.edge(str(p.id), f"{c.id}_{c.op.name}")

    return dot

def draw_ascii(root: Unit) -> str:
    nodes, edges = trace(root)
    lines = [f"Node {n.id}: Value: {n.value!r}" for n in sorted(nodes, key=lambda n: n.id)]
    lines += ["", "Edges:"]
    lines += [f"{p.id} -> {c.id}" for p, c in sorted(edges, key=lambda e: (e[0].id, e[1].id))]
    return "\n".join(lines) + "\n"

def display_trace(root: Unit):
    print(draw_ascii(root))

if __name__ == "__main__":
    a = Unit(2.0, label="a")
    b = Unit(3.0, label="b")
    c = a + b
    display_trace(c)
