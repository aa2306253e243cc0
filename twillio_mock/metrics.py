from collections import defaultdict
from typing import Dict, Tuple


class MetricsCollector:
    def __init__(self) -> None:
        # (path, status) -> count
        self.http_requests_total: Dict[Tuple[str, str], int] = defaultdict(int)
        # result -> count (for message creation)
        self.messages_total: Dict[str, int] = defaultdict(int)
        # simple latency buckets in ms
        self.latency_buckets: Dict[str, int] = {
            "100": 0,
            "500": 0,
            "+Inf": 0,
        }
        self.latency_count = 0

    def inc_http_request(self, path: str, status: int) -> None:
        self.http_requests_total[(path, str(status))] += 1

    def inc_message_result(self, result: str) -> None:
        self.messages_total[result] += 1

    def observe_latency_ms(self, latency_ms: float) -> None:
        self.latency_count += 1
        if latency_ms <= 100:
            self.latency_buckets["100"] += 1
        if latency_ms <= 500:
            self.latency_buckets["500"] += 1
        self.latency_buckets["+Inf"] += 1

    def render(self) -> str:
        """Return plain text metrics."""
        lines: list[str] = []

        for (path, status), value in self.http_requests_total.items():
            lines.append(
                f'http_requests_total{{path="{path}",status="{status}"}} {value}'
            )

        for result, value in self.messages_total.items():
            lines.append(f'messages_total{{result="{result}"}} {value}')

        for le, value in self.latency_buckets.items():
            lines.append(f'request_latency_ms_bucket{{le="{le}"}} {value}')
        lines.append(f"request_latency_ms_count {self.latency_count}")

        return "\n".join(lines) + "\n"
