DEFAULT_CLASSDUMP_DIR = "build/jacoco/classdump"

CLASSPATH_HELP_TEXT = (
    "Local build output directories that define the classes to keep.\n"
    "Comma-separated, may be repeated. Archive entries are consulted\n"
    "when reading class bytes but are never scanned.\n"
    "Example:\n"
    "  %(prog)s -c build/classes/main,build/classes/thrift"
)

EXCLUSION_HELP_TEXT = (
    "Directory receiving pruned classdump files.\n"
    "Must not exist yet. Default: <classdump parent>/exclclassdump"
)

EPILOG_TEXT = """
Examples:
  Prune the default classdump against the main build output
  %(prog)s -c build/classes/main

  Several build output directories, explicit classdump and exclusion tree
  %(prog)s -d build/jacoco/classdump -c build/classes/main,build/classes/stress -e build/jacoco/excluded

  Only report what would be pruned
  %(prog)s -c build/classes/main --dry-run

Pruned files are moved, never deleted: move them back to restore the classdump.
"""
