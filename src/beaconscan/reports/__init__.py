from .json_report import JSONReporter
from .terminal_report import print_row_table, print_sensor_summary
