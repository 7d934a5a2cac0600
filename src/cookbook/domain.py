"""Cookbook bounded context: Recipes, Comments, and Rating aggregation.

Handles the recipe lifecycle (publish, edit, delete, likes, views), the
comment lifecycle (post, edit, delete, replies, likes), and keeps each
recipe's aggregate rating in step with its rated comments.
"""

from protean.domain import Domain

from cookbook.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(level="INFO", log_dir="logs", log_file_prefix="recipeshare")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
cookbook = Domain(name="cookbook")
