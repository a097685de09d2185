import os
import sys
import json
import logging
import socket
from kafka import KafkaProducer
from kafka.errors import NoBrokersAvailable

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "/data/data_projet.json"


def iter_documents(path):
    """Yield one ``{"data": [record]}`` document per booking in ``path``."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    for record in data["data"]:
        yield json.dumps({"data": [record]}).encode("utf-8")


def check_broker(kafka_broker, timeout=10):
    """TCP probe of a ``host:port`` broker address; IPv6 hosts go in brackets."""
    logger.info(f"🔌 Testing connection to Kafka broker at {kafka_broker}...")
    try:
        host, port = kafka_broker.rsplit(":", 1)
        host = host.strip("[]")
        with socket.create_connection((host, int(port)), timeout=timeout):
            logger.info(f"✅ Connection to {kafka_broker} successful.")
            return True
    except (OSError, ValueError) as e:
        logger.error(f"❌ Cannot connect to Kafka broker at {kafka_broker}: {e}")
        return False


def main():
    logging.basicConfig(level=logging.INFO)

    kafka_broker = os.getenv("KAFKA_BROKER")
    source_topic = os.getenv("SOURCE_TOPIC", "source")
    data_file = os.getenv("DATA_FILE", DEFAULT_DATA_FILE)

    if not kafka_broker:
        logger.error("❌ KAFKA_BROKER environment variable is not set.")
        sys.exit(1)

    if not check_broker(kafka_broker):
        sys.exit(1)

    try:
        producer = KafkaProducer(bootstrap_servers=kafka_broker)
        logger.info("🟢 KafkaProducer initialized successfully.")
    except NoBrokersAvailable as e:
        logger.error(f"❌ Kafka broker not available: {e}")
        sys.exit(1)

    try:
        for i, document in enumerate(iter_documents(data_file)):
            producer.send(source_topic, value=document)
            logger.info(f"📤 Record {i+1} sent to topic '{source_topic}'.")
    except FileNotFoundError:
        logger.error(f"❌ Data file '{data_file}' not found.")
        sys.exit(1)
    except (ValueError, KeyError) as e:
        logger.error(f"❌ Unexpected error while sending data: {e}")
        sys.exit(1)
    finally:
        producer.flush()
        producer.close()

    logger.info("✅ All data sent and producer closed cleanly.")


if __name__ == "__main__":
    main()
