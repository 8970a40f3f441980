"""
Service context extraction for distributed logging.

Identifies which process produced a log line (HTTP API, intake worker,
transition handlers) so interleaved logs from several consumers stay traceable.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'bus-ticketing')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname when orchestrated, PID for local development
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
