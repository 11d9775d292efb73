"""Web search traffic forecasting (daily clicks, Prophet with spike holidays).

Importable steps of the one-off analysis plus a CLI-friendly script under /scripts.
"""

from .config import ProjectConfig
