import logging

"""
Create a package-wide logger instance. Applications may attach their own handlers or adjust the
level, e.g. `poolsnap.logger.setLevel(logging.DEBUG)` to see deduplication and block details.
"""

logger = logging.getLogger("poolsnap")
logger.propagate = False
logger.setLevel(logging.INFO)
logger.addHandler(logging.StreamHandler())
