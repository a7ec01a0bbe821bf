"""Starter .dirdiff.toml and .dirdiff-ignore templates."""

DEFAULT_TOML = """\
# dirdiff configuration
version = "1.0"

[compare]
detect_moves = true       # pair added/removed files with the same name
encoding = "utf-8"        # tried first; platform default and latin-1 follow

[ignore]
file = ".dirdiff-ignore"  # one glob per line; defaults apply if missing
# patterns = ["*.class", ".DS_Store"]

[output]
format = "terminal"       # terminal | json | csv
view = "tree"             # tree | table
show_summary = true
"""

FULL_TOML = DEFAULT_TOML + """\
show_identical = true     # list identical entries in the terminal views

[export]
type_filter = "all"       # all | directory | java | xml | json | yaml | props | file
status_filter = "all"     # all | added | removed | modified | identical | moved | moved_modified

[namespaces]
# disable = ["GO_PACKAGE"]   # built-in or custom extractor ids
"""

DEFAULT_IGNORE = """\
# dirdiff ignore list: one glob per line
target
.git
build
node_modules
"""
