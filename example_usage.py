#!/usr/bin/env python3
"""
Example script demonstrating how to send system metrics to OpenTSDB
with the SDK.
"""
import socket
import time

import psutil

from opentsdb_sdk import OpenTsdbClient, OpenTsdbMetric, config, setup_logging


def collect_system_metrics(host):
    """Collect basic system metrics as OpenTSDB data points."""
    tags = {'host': host}
    return [
        OpenTsdbMetric.named('sys.cpu.usage', psutil.cpu_percent(interval=1), tags),
        OpenTsdbMetric.named('sys.memory.usage', psutil.virtual_memory().percent, tags),
        OpenTsdbMetric.named('sys.disk.usage', psutil.disk_usage('/').percent, tags),
    ]


def print_outcomes(outcomes):
    for outcome in outcomes:
        status = 'sent' if outcome.success else f'failed ({outcome.error})'
        print(f"Batch of {outcome.size} metrics {status}")


def main():
    """Main function to run the example."""
    setup_logging(config.LOG_LEVEL)
    print("Starting metrics collection example...")

    client = OpenTsdbClient(on_outcomes=print_outcomes)
    client.set_batch_size_limit(2)

    # Check if the server is accessible
    if not client.health_check():
        print("Warning: OpenTSDB is not accessible. Failed batches will only be logged.")

    host = socket.gethostname()
    with client:
        # Collect metrics every 5 seconds for 1 minute
        for _ in range(12):
            client.send(collect_system_metrics(host))
            time.sleep(5)

    print("Metrics collection example completed.")


if __name__ == "__main__":
    main()
