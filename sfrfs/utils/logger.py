import os
import datetime
import threading


class Logger:
    # Log levels
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    LEVEL_NAMES = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR"
    }

    def __init__(self, min_level=INFO, debug_filter=0, display_thread_name=True,
                 log_to_file=False, logs_dir="_logs", console=True):
        """
        Create a logger instance that components receive explicitly.

        Args:
            min_level (int): Messages below this level are discarded.
            debug_filter (int): Detail level filter for DEBUG messages (0-5, higher = more detail).
            display_thread_name (bool): Append the thread name to each message.
            log_to_file (bool): Append messages to a session file under ``logs_dir``.
            logs_dir (str): Directory for session log files.
            console (bool): Print messages to stdout.
        """
        self.min_level = min_level
        self.debug_filter = debug_filter
        self.display_thread_name = display_thread_name
        self.console = console
        self.listener = None
        self._log_file_path = None
        self._lock = threading.Lock()
        if log_to_file:
            self._setup_log_file(logs_dir)

    @classmethod
    def quiet(cls):
        """Logger used when a component is not given one: warnings and errors only."""
        return cls(min_level=cls.WARNING)

    def set_listener(self, listener):
        """Forward formatted messages to an object exposing ``add_message(message, level, logLevel)``."""
        self.listener = listener

    def is_enabled(self, level, logLevel=5):
        if level < self.min_level:
            return False
        if level == Logger.DEBUG and logLevel > self.debug_filter:
            return False
        return True

    def log_message(self, message, level=INFO, logLevel=5):
        """
        Logs a message to the console, the listener and optionally a file.

        Args:
            message (str): The message to log.
            level (int): Message level (DEBUG=0, INFO=1, WARNING=2, ERROR=3)
            logLevel (int): Detail level from 0 (least detailed) to 5 (most detailed)
                            Only DEBUG messages with logLevel <= debug_filter will be displayed
        """
        if not self.is_enabled(level, logLevel):
            return

        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        thread_name = threading.current_thread().name
        level_name = self.LEVEL_NAMES.get(level, "INFO")

        if self.display_thread_name:
            formatted_message = f"[{timestamp}] {level_name}: {message}; Thread: {thread_name}"
        else:
            formatted_message = f"[{timestamp}] {level_name}: {message}"

        # Worker threads of the ensemble processor share one instance
        with self._lock:
            if self.console:
                print(formatted_message)

            if self.listener:
                self.listener.add_message(formatted_message, level, logLevel)

            if self._log_file_path:
                with open(self._log_file_path, "a") as log_file:
                    log_file.write(formatted_message + "\n")

    def debug(self, message, logLevel=5):
        self.log_message(message, Logger.DEBUG, logLevel)

    def info(self, message):
        self.log_message(message, Logger.INFO)

    def warning(self, message):
        self.log_message(message, Logger.WARNING)

    def error(self, message):
        self.log_message(message, Logger.ERROR)

    @property
    def log_file_path(self):
        return self._log_file_path

    def _setup_log_file(self, logs_dir):
        """Create the logs directory and set up the log file path based on the current date-time."""
        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)

        timestamp = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M")
        self._log_file_path = os.path.join(logs_dir, f"Session_{timestamp}.log")
