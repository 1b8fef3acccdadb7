#!/usr/bin/env python3
"""
Example: Basic usage of cohesion-report as a Python library
"""

from cohesion_report import analyze

# Analyze a codebase into a fresh directory
result = analyze("/path/to/project", "cohesion-out", metrics=["LCOM", "LCOM4", "TCC"])

# Print outliers per metric
for index in result.report.indexes:
    print(f"{index.metric}: mean={index.statistics.mean:.2f} score={index.overall_score:.1f}")
    for entry in index.defects:
        print(f"  - {entry.class_name}: {entry.raw_value} (diff {entry.diff:+.1f})")
    print()

print(f"Analysis complete: score {result.score:.1f}/100 over "
      f"{len(result.skeleton)} classes, report in {result.output}")
