from dedupkit.core.models import KeyStrategy, Action

STRATEGY_ALIASES = {
    "hash": KeyStrategy.HASH,
    "name": KeyStrategy.NAME,
}

STRATEGY_CHOICES = list(STRATEGY_ALIASES.keys())

STRATEGY_HELP_TEXT = (
    "Comparison method:\n"
    "  hash : " + KeyStrategy.HASH.description + "\n"
    "  name : " + KeyStrategy.NAME.description + "\n"
    "Default: hash"
)

ACTION_ALIASES = {
    "list": Action.LIST,
    "delete": Action.DELETE,
}

ACTION_CHOICES = list(ACTION_ALIASES.keys())

ACTION_HELP_TEXT = (
    "What to do with duplicates:\n"
    "  list   : only show duplicate groups\n"
    "  delete : keep the first file of each group, remove the rest\n"
    "           (combine with --dry-run to preview)\n"
    "Default: list"
)

OUTPUT_CHOICES = ["plain", "json"]

EPILOG_TEXT = """
Examples:
  List duplicate files (by content) in Downloads
  %(prog)s ~/Downloads

  Same, including all subdirectories, as JSON
  %(prog)s ~/Downloads -r -o json

  Show which same-named photos would be deleted, without touching anything
  %(prog)s ./photos --by name --action delete --dry-run -r

  Delete duplicates (moving them to the trash) without confirmation, for scripts
  %(prog)s ~/Downloads -r --action delete --trash --force

The first file found for each group (names sorted, depth-first) is always kept.
Defaults can be set in ~/.dedupkit.toml under a [dedupe] table.
"""
