import logging
import os
from typing import Any

separator = "".center(60, "-")

def log_test_name(name : str) -> None:
    logging.info(separator)
    logging.info(name)
    logging.info(separator)

def log_input_expected_result(input : Any, expected : Any, result : Any) -> None:
    logging.info(f"{str(input)}:  expected: {str(expected)}  result: {str(result)}")

def log_input_expected_error(input : Any, expected_error : type[Exception], error : Exception) -> None:
    logging.info(f"{str(input)}:  expected: {expected_error.__name__}  error: {type(error).__name__}: {str(error)}")

def create_logfile(results_path : str, logfile_name : str, log_level = logging.DEBUG) -> logging.FileHandler:
    """
    Send logging output to a file in the results directory as well as the console
    """
    os.makedirs(results_path, exist_ok=True)
    logfile = os.path.join(results_path, logfile_name)
    file_handler = logging.FileHandler(logfile, encoding='utf-8', mode='w')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logging.getLogger('').addHandler(file_handler)
    return file_handler

def end_logfile(file_handler : logging.FileHandler) -> None:
    logging.getLogger('').removeHandler(file_handler)
    file_handler.close()
