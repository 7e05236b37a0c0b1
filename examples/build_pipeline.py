"""Build Pipeline Example for digraph.

This example models a small build as a graph of tasks:
- Edges point from a task to the tasks that must run after it
- Edge weights are task durations in minutes
- Edge data records why the ordering exists

It prints a valid execution order, the quickest route to the release
artifact, and writes the graph to JSON and TOML next to this script.
"""

from pathlib import Path

import digraph as dg

# -----------------------------------------------------------------------------
# Graph Setup
# -----------------------------------------------------------------------------

pipeline: dg.Graph[str] = (
    dg.Graph()
    .add_edge("checkout", "install", 2, {"reason": "sources needed"})
    .add_edge("install", "lint", 1)
    .add_edge("install", "compile", 6, {"reason": "dependencies needed"})
    .add_edge("compile", "unit-tests", 4)
    .add_edge("compile", "package", 3)
    .add_edge("unit-tests", "package", 1)
    .add_edge("lint", "package", 9)
    .add_edge("package", "release", 1, {"reason": "artifact needed"})
    .add_node("docs")
)


def main() -> None:
    print("Execution order:")
    for step, task in enumerate(pipeline.topological_sort(), start=1):
        print(f"  {step}. {task}")

    route = pipeline.shortest_path("checkout", "release")
    print(f"\nQuickest route ({route.weight} min): {' -> '.join(route)}")

    print("\nAfter compile:", ", ".join(pipeline.topological_sort(["compile"], include_sources=False)))

    out_dir = Path(__file__).parent
    dg.save_graph(pipeline, out_dir / "build_pipeline.json")
    dg.save_graph(pipeline, out_dir / "build_pipeline.toml")

    restored = dg.load_graph(out_dir / "build_pipeline.toml")
    assert restored.serialize() == pipeline.serialize()


if __name__ == "__main__":
    main()
