"""Top‑level package for the Budget Allocator.

Splits a budget across a fixed set of spending categories by percent. The
primary modules are:

* ``model`` – categories, groups and the immutable allocation snapshot
* ``mutations`` – the permitted edits (percent, budget, currency)
* ``derivation`` – amounts, group totals and the balance flag
* ``session`` – the application shell holding the current snapshot
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_allocator/dashboard.py
```
"""

from .derivation import ViewModel, derive
from .model import AllocationModel, Category, Group, initialize, reset
from .mutations import set_budget, set_category_percent, set_currency
from .session import AllocationSession

__all__ = [
    "AllocationModel",
    "AllocationSession",
    "Category",
    "Group",
    "ViewModel",
    "derive",
    "initialize",
    "reset",
    "set_budget",
    "set_category_percent",
    "set_currency",
]
