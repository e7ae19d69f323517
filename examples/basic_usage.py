#!/usr/bin/env python3
"""
Example: Basic usage of depscope as a Python library
"""

from depscope import DependencyAnalyzer, IncludeScanner

# Scan a source tree and analyze it
records = IncludeScanner("/path/to/project/src").scan()
analyzer = DependencyAnalyzer(records)

# Circular dependency clusters
for component in analyzer.cycles:
    print(f"Cycle SCC_{component.index}: {', '.join(component.members)}")

# Build order, leaf layer first
for depth, nodes in analyzer.layers.items():
    names = [analyzer.component_names[n] for n in nodes]
    print(f"[{depth}] {', '.join(names)}")

print(f"Analysis complete: {len(analyzer.components)} component(s) in "
      f"{analyzer.layer_count} layer(s)")

# Mermaid diagram of everything a "net" module depends on
print(analyzer.render_diagram("net"))
