"""Ingestion layer.

Adapters that receive advertisements from the BLE stack, decode them and
apply the readings to the state store.
"""

from switchbot_exporter.ingestion.advertisement import AdvertisementIngestor

__all__ = ["AdvertisementIngestor"]
