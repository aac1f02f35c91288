"""Screen modules; importing this package registers every screen."""
from . import columns, row_detail, start, values  # noqa: F401
