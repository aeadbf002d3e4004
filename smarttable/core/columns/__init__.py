"""Column presentation: headers, value formatting, render plans.

Submodules are imported directly (smarttable.core.columns.render_plan, ...)
because the classifier depends on headers while the formatters depend on
the classifier's media heuristics.
"""
