"""Health subsystem — check definitions, host metrics, aggregation."""

from .checks import FunctionCheck, HttpCheck, InspectionSet
from .host import HostMetrics, collect_host_metrics
from .inspection import InspectionError, load_inspection_set
from .orchestrator import build_report, orchestrate
from .report import CategoryReport, CheckResult, CompositeReport
