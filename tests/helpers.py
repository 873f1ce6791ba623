from unittest.mock import MagicMock

import requests


def make_response(status_code=200, body=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if json_error:
        resp.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "", 0)
    else:
        resp.json.return_value = body
    if resp.ok:
        resp.raise_for_status.return_value = None
    else:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return resp


def matching_body():
    return {"name": "ShiduWatcher", "status": "running"}


class ManualClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class PortMap:
    """session.get side effect: answers per port, connection refused otherwise."""

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.probed = []

    def __call__(self, url, **kwargs):
        port = int(url.split(":")[2].split("/")[0])
        self.probed.append(port)
        answer = self.answers.get(port)
        if answer is None:
            raise requests.ConnectionError(f"Connection refused: {port}")
        if isinstance(answer, Exception):
            raise answer
        return answer
