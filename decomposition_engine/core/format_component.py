"""Format Component — plain-text summary box logged after component writes.

Invariants:
    - Pure string building: no IO, no ANSI color codes
    - Output is informational only; nothing parses it back
"""

from decomposition_engine.core.entities import Component, DecompositionMetrics


def format_component(component: Component) -> str:
    """Render a bordered summary: header, description, dependency list."""
    header = (
        f"Component: {component.name} "
        f"({component.status.value}, complexity: {component.complexity:g})"
    )
    deps = ", ".join(component.dependencies) if component.dependencies else "None"
    dependencies_line = f"Dependencies: {deps}"

    width = max(len(header), len(component.description), len(dependencies_line)) + 4
    border = "─" * width
    return "\n".join([
        f"┌{border}┐",
        f"│ {header.ljust(width - 2)} │",
        f"├{border}┤",
        f"│ {component.description.ljust(width - 2)} │",
        f"│ {dependencies_line.ljust(width - 2)} │",
        f"└{border}┘",
    ])


def format_metrics(metrics: DecompositionMetrics) -> str:
    """One-line metrics summary."""
    return (
        f"components={metrics.component_count} "
        f"avg_complexity={metrics.average_complexity:.2f} "
        f"max_depth={metrics.max_depth} "
        f"dependencies={metrics.dependency_count} "
        f"balance={metrics.balance_score:.2f}"
    )
