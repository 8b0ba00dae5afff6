"""
HTML report renderer.

Turns a HealthSnapshot into one self-contained HTML document using a
Jinja2 template. Every collected value is escaped before it is embedded.
"""

import logging

from jinja2 import Environment, PackageLoader, select_autoescape

from ..core.models import HealthSnapshot
from ..core.results import CollectorResult


logger = logging.getLogger(__name__)

GOOD = "status-good"
BAD = "status-bad"
NOT_AVAILABLE = "Not Available"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_number(value) -> str:
    """75.0 -> '75', 75.25 -> '75.25'."""
    return f"{float(value):g}"


def format_percent(value) -> str:
    return f"{format_number(value)}%"


def status_class(good: bool) -> str:
    return GOOD if good else BAD


def _items(result: CollectorResult) -> list:
    """Rows of a list-valued result; failed results render as empty tables."""
    return list(result.value_or([]))


class ReportRenderer:
    """
    Renders the health report.
    """

    def __init__(self, title: str = "System Health Report", template: str = "report.html"):
        self.title = title
        self.env = Environment(
            loader=PackageLoader("healthreport.report", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["number"] = format_number
        self.env.filters["percent"] = format_percent
        self.template = self.env.get_template(template)

    def render(self, snapshot: HealthSnapshot) -> str:
        """Render *snapshot* into an HTML document."""
        html = self.template.render(**self._context(snapshot))
        logger.debug(f"Rendered report for {snapshot.hostname} ({len(html)} characters)")
        return html

    def _context(self, snapshot: HealthSnapshot) -> dict:
        cpu = snapshot.cpu.value_or(None)
        memory = snapshot.memory.value_or(None)
        updates = snapshot.updates.value_or(None)

        connectivity = []
        for result in snapshot.connectivity:
            if result.ok:
                reachable = result.value.reachable
                connectivity.append({
                    "host": result.value.host,
                    "status": "Connected" if reachable else "Not Connected",
                    "css": status_class(reachable),
                })
            else:
                connectivity.append({
                    "host": result.source,
                    "status": NOT_AVAILABLE,
                    "css": BAD,
                })

        return {
            "title": self.title,
            "hostname": snapshot.hostname,
            "generated_at": snapshot.timestamp.strftime(TIMESTAMP_FORMAT),
            "system": snapshot.system_info.value_or(None),
            "cpu": {
                "value": format_percent(cpu.usage_percent) if cpu else NOT_AVAILABLE,
                "css": "" if cpu else BAD,
            },
            "memory": memory,
            "not_available": NOT_AVAILABLE,
            "bad": BAD,
            "disks": _items(snapshot.disks),
            "connectivity": connectivity,
            "updates": {
                "value": str(updates.count) if updates else NOT_AVAILABLE,
                "css": status_class(updates is not None and updates.up_to_date),
            },
            "audio_devices": [
                {"device": device, "css": status_class(device.is_ok)}
                for device in _items(snapshot.audio_devices)
            ],
            "network_adapters": _items(snapshot.network_adapters),
            "services": [
                {"service": service, "css": status_class(service.is_running)}
                for service in _items(snapshot.services)
            ],
        }
