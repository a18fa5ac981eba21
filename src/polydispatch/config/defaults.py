# src/polydispatch/config/defaults.py
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",

    # Logging configuration
    "logging": {
        "level": "${POLYDISPATCH_LOG_LEVEL:WARNING}",
        "destination": "${POLYDISPATCH_LOG_DESTINATION:stdout}",
        "file_path": "${POLYDISPATCH_LOG_DIR:logs}/polydispatch.log",
        "max_size_mb": 10,
        "backup_count": 5,
    },

    # Registry behavior
    "registry": {
        "notification_policy": "${POLYDISPATCH_NOTIFICATION_POLICY:collect}",
        "composition_order": "inside_out",
        "traversal_order": "pre_order",
    },
}
