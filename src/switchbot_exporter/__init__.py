"""switchbot_exporter - Prometheus exporter for SwitchBot BLE advertisements."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("switchbot-exporter")
except PackageNotFoundError:
    __version__ = "0+local"
from switchbot_exporter.config import ExporterConfig
from switchbot_exporter.decoder import DecodeOutcome, DecodeResult, decode, decode_service_data
from switchbot_exporter.exceptions import SwitchBotConfigError, SwitchBotError, SwitchBotScanError
from switchbot_exporter.ingestion import AdvertisementIngestor
from switchbot_exporter.metrics import SwitchBotCollector, build_registry, metric_samples
from switchbot_exporter.models import CurtainReading, DeviceRecord, MeterReading, MetricSample, Reading
from switchbot_exporter.state import DeviceStateStore

__all__ = [
    "__version__",
    "AdvertisementIngestor",
    "CurtainReading",
    "DecodeOutcome",
    "DecodeResult",
    "DeviceRecord",
    "DeviceStateStore",
    "ExporterConfig",
    "MeterReading",
    "MetricSample",
    "Reading",
    "SwitchBotCollector",
    "SwitchBotConfigError",
    "SwitchBotError",
    "SwitchBotScanError",
    "build_registry",
    "decode",
    "decode_service_data",
    "metric_samples",
]
