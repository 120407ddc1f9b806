VERSION = "0.1.0"

# This will be templated during the build if we're in a git repository
GIT_COMMIT = "__GIT_COMMIT__"
