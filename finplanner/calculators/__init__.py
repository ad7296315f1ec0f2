"""Helper package that exposes the core financial calculators.

The `calculators` package contains small, focused modules, each a pure
function of a frozen parameter record:

* ``retirement`` – inflation-adjusted growth of savings plus annual contributions.
* ``savings`` – monthly deposits under annual, semiannual, quarterly, monthly or daily compounding.
* ``taxes`` – progressive federal brackets, flat state rates and payroll taxes.
* ``portfolio`` – risk-profile allocation and blended-return growth of a lump sum.
* ``errors`` – the exceptions raised for invalid inputs.

Each module exposes a few public functions with clear parameters and returns.  See
individual docstrings for details.
"""

from . import errors, retirement, savings, taxes, portfolio  # noqa: F401

__all__ = ["errors", "retirement", "savings", "taxes", "portfolio"]
