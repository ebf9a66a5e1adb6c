from .audit_logger import audit_log
from .classification import classify_bp
from .statistics import summarize
from .validators import validate_reading, validate_measurement, REST_DEFAULTS, INTERACTIVE_DEFAULTS
