"""Constants for license-check."""

# Process exit codes
EXIT_SUCCESS = 0  # Every dependency passed
EXIT_ISSUES = 1  # At least one dependency fails the build
EXIT_ERROR = 2  # Resolution, read or configuration failure

DEFAULT_MAX_SEARCH_DEPTH = 12
DEFAULT_SCOPE = "compile"
DEFAULT_REMOTE_REPOSITORY = "https://repo.maven.apache.org/maven2"
DEFAULT_LOCAL_REPOSITORY = "~/.m2/repository"
DEFAULT_CACHE_DIR = "~/.cache/license-check"

BANNER = "VALIDATING OPEN SOURCE LICENSES"

EXPLANATION = (
    "This tool validates that the artifacts you're using have a license "
    "declared in the pom. It then tries to determine whether the license is "
    "one of the Open Source Initiative (OSI) approved licenses. If it can't "
    "find a match, or if the license is on your declared blacklist or not on "
    "your declared whitelist, then the build will fail."
)

DISCLAIMER = "This tool and its authors are not associated with the OSI."
