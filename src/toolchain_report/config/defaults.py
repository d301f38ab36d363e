"""Default configuration values for toolchain-report.

This module centralizes all hard-coded default values used throughout
the application, making them easy to discover and modify.
"""

# Corpus: a diversified set of real-world Go programs
DEFAULT_CORPUS_PACKAGES: tuple[str, ...] = (
    "github.com/boltdb/bolt/cmd/bolt",
    "github.com/coreos/etcd",
    "github.com/gogits/gogs",
    "github.com/grafana/grafana/pkg/cmd/grafana-server",
    "github.com/influxdata/influxdb/cmd/influxd",
    "github.com/junegunn/fzf/src/fzf",
    "github.com/mholt/caddy/caddy",
    "github.com/monochromegane/the_platinum_searcher/cmd/pt",
    "github.com/nsqio/nsq/apps/nsqd",
    "github.com/prometheus/prometheus/cmd/prometheus",
    "github.com/spf13/hugo",
    "golang.org/x/tools/cmd/guru",
)
DEFAULT_BENCHMARK = "github.com/alecthomas/go_serialization_benchmarks"

# Output
DEFAULT_REPORT_NAME = "report.md"
WORKSPACE_TEMP_PREFIX = "report-gopath-"

# Sampling
DEFAULT_SAMPLE_COUNT = 1
SAMPLE_COUNT_MIN = 1
SAMPLE_COUNT_MAX = 100

# Timeouts (seconds)
DEFAULT_REBUILD_TIMEOUT_SECONDS = 3600
DEFAULT_TEST_TIMEOUT_SECONDS = 1800
DEFAULT_BENCHMARK_TIMEOUT_SECONDS = 3600
DEFAULT_FETCH_TIMEOUT_SECONDS = 1800
DEFAULT_VCS_TIMEOUT_SECONDS = 600

# Validation ranges
TIMEOUT_MIN = 1
TIMEOUT_MAX = 24 * 3600
