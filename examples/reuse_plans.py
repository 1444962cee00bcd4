"""Compile the walks of a small cyclic graph once and replay them with several combiners."""

import logging

import graphfold as gf

logging.basicConfig(level=logging.DEBUG)

graph = gf.AdjacencyGraph.from_edges(
    [("boot", "load"), ("load", "parse"), ("parse", "load"), ("parse", "run"), ("boot", "run"), ("run", "exit")],
)

plan = gf.compile_fold(graph, "boot")
print("walks:", sorted(plan.walks))
print("lengths:", sorted(plan.replay(0, lambda n, _: n + 1)))
print("labels:", sorted(plan.replay("", lambda s, v: f"{s}/{v}" if s else v)))

summary = gf.compile_fold_right(graph, "boot")
print("reachable:", summary.replay(frozenset(), lambda acc, v: frozenset({v}).union(*acc) if acc else frozenset({v})))

print("boot -> exit:", sorted(gf.find_all_paths(graph, "boot", "exit")))
