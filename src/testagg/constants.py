"""Shared constants for target registration and test execution."""

# Aggregate targets
BUILD_ALL_TESTS = "build-all-tests"
RUN_ALL_TESTS = "run-all-tests"
AGGREGATE_NAMES = (BUILD_ALL_TESTS, RUN_ALL_TESTS)

# Run-wrapper naming
RUN_WRAPPER_PREFIX = "run-wrapper("
RUN_WRAPPER_SUFFIX = ")"

# Result and artifact layout under the build root
RESULTS_DIR_NAME = "test_results"
RESULTS_EXTENSION = ".xml"
BIN_DIR_NAME = "bin"
SOURCE_EXTENSION = ".cpp"

# Timeouts (seconds)
TIMEOUT_TEST_RUN = None  # No limit unless the caller asks for one
