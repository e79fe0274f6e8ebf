import json

import requests


def make_response(status_code, body=None, url="http://store.test", raw=None):
    """A real requests.Response with the given status and JSON body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


class FlaskStoreSession:
    """Stands in for requests.Session and sends every call to a Flask test client."""

    def __init__(self, client, base_url):
        self.client = client
        self.base_url = base_url
        self.headers = {}
        self.calls = []
        self.fail_next = None

    def request(self, method, url, json=None, timeout=None):
        assert url.startswith(self.base_url), url
        assert timeout is not None
        path = url[len(self.base_url):]
        self.calls.append((method, path))

        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

        response = self.client.open(path, method=method, json=json)
        return make_response(response.status_code, url=url, raw=response.get_data())

    def fail_on_next_call(self, error):
        self.fail_next = error
