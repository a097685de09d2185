import os
import logging
from kafka import KafkaConsumer, KafkaProducer

from travel_pricing.utils.transform_json import transform, Outcome

logger = logging.getLogger(__name__)


def route_message(value, producer, result_topic, failure_topic):
    """Price one message and send it to the topic matching its outcome."""
    output, outcome = transform(value)
    if outcome is Outcome.SUCCESS:
        producer.send(result_topic, value=output)
        logger.info(f"📤 Priced record sent to topic '{result_topic}'.")
    else:
        producer.send(failure_topic, value=value)
        logger.warning(f"❌ Invalid record forwarded to topic '{failure_topic}'.")
    return outcome


def main():
    logging.basicConfig(level=logging.INFO)

    kafka_broker = os.getenv("KAFKA_BROKER")
    if not kafka_broker:
        logger.error("❌ KAFKA_BROKER environment variable is not set.")
        raise SystemExit(1)

    source_topic = os.getenv("SOURCE_TOPIC", "source")
    result_topic = os.getenv("RESULT_TOPIC", "result")
    failure_topic = os.getenv("FAILURE_TOPIC", "failure")

    # values stay raw bytes: the transform does its own parsing
    consumer = KafkaConsumer(source_topic, bootstrap_servers=kafka_broker, auto_offset_reset='earliest')
    producer = KafkaProducer(bootstrap_servers=kafka_broker)
    logger.info(f"🟢 Consuming '{source_topic}' -> '{result_topic}' / '{failure_topic}'")

    try:
        for msg in consumer:
            logger.info(f"📥 Received message at offset {msg.offset}")
            route_message(msg.value, producer, result_topic, failure_topic)
    finally:
        producer.flush()
        producer.close()
        consumer.close()


if __name__ == "__main__":
    main()
