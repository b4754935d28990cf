from .sensor_reader import SensorParseError, load_sensors, load_sensors_csv, load_sensors_text, parse_sensors
