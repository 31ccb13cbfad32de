import json
import logging

from pythonjsonlogger.json import JsonFormatter

from handling_portal.core.logging import TRACE_ID_CTX, setup_logging


def test_json_lines_carry_trace_id(capsys):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("INFO")
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        token = TRACE_ID_CTX.set("trace-123")
        try:
            logging.getLogger("handling_portal.test").info("booking submitted")
        finally:
            TRACE_ID_CTX.reset(token)
        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["message"] == "booking submitted"
        assert record["trace_id"] == "trace-123"
        assert record["levelname"] == "INFO"
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
