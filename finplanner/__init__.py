"""Retirement, savings, tax and investment projection calculators.

The numeric engines live in :mod:`finplanner.calculators`; the Streamlit
widgets, plotly charts, CSV export and workbook sampler used by ``app.py``
live in :mod:`finplanner.components`.
"""

__version__ = "0.1.0"
