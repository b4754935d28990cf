from beaconscan.models import Interval, Point, Sensor

__version__ = "0.1.0"
