"""HirePath: job matching and application lifecycle core."""

from hirepath.utils.constants import APP_NAME, VERSION

__app_name__ = APP_NAME
__version__ = VERSION
