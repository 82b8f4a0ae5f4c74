"""Shared helpers for building graph documents in tests."""

from pathlib import Path

from di_lens.document import parse_document
from di_lens.analysis.graph_builder import GraphBuilder

FIXTURES = Path(__file__).parent / "fixtures"


def make_document(types=(), providers=(), consumers=(), edges=()):
    """Build a GraphDocument from terse tuples.

    types:     "id" or (id, module, package)
    providers: (id, provided_type, module, requires)
    consumers: (id, needed_type, module)
    edges:     (from, to, kind)
    """
    type_entries = []
    for t in types:
        if isinstance(t, str):
            type_entries.append({"id": t})
        else:
            tid, module, package = t
            type_entries.append({"id": tid, "module": module, "package": package})

    provider_entries = [
        {"id": pid, "type": ptype, "owner": pid.rsplit(".", 1)[0], "module": module,
         "requires": list(requires)}
        for pid, ptype, module, requires in providers
    ]
    consumer_entries = [
        {"id": cid, "needs": needs, "owner": cid.rsplit(".", 1)[0], "module": module}
        for cid, needs, module in consumers
    ]
    edge_entries = [{"from": s, "to": t, "kind": k} for s, t, k in edges]

    return parse_document({
        "types": type_entries,
        "providers": provider_entries,
        "consumers": consumer_entries,
        "edges": edge_entries,
    })


def build_graph(**kwargs):
    return GraphBuilder().build(make_document(**kwargs))


def chain_graph(*ids, kind="requires"):
    """Type nodes linked one after another: ids[0] -> ids[1] -> ..."""
    edges = [(a, b, kind) for a, b in zip(ids, ids[1:])]
    return build_graph(types=ids, edges=edges)
