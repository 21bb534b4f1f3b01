"""test_decoder.py.

Unit tests for the snap_postgresql.wire.decoder and models.metric modules.
"""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from snap_postgresql.errors import DecodeError, UnknownContentTypeError
from snap_postgresql.models.metric import Metric
from snap_postgresql.wire.decoder import decode_batch, encode_batch


def _payload(*metrics) -> bytes:
    return json.dumps(list(metrics)).encode()


def test_decode_keeps_order_and_fields():
    content = _payload(
        {"namespace": ["intel", "cpu"], "timestamp": "2016-01-02T15:04:05Z",
         "tags": {"host": "a"}, "unit": "%", "data": 99},
        {"namespace": ["intel", "mem"], "timestamp": "2016-01-02T15:04:05Z",
         "data": [1.5, 2.5], "data_type": "[]float64"},
    )
    metrics = decode_batch("snap.json", content)

    assert [m.key for m in metrics] == ["intel.cpu", "intel.mem"]
    assert metrics[0].tags == {"host": "a"}
    assert metrics[0].unit == "%"
    assert metrics[0].data == 99
    assert metrics[0].timestamp == datetime(2016, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert metrics[1].data_type == "[]float64"
    assert metrics[1].metric_value().encode() == "1.5, 2.5"


def test_decode_preserves_json_value_types():
    content = _payload(
        {"namespace": ["a"], "timestamp": "2016-01-02T15:04:05Z", "data": True},
        {"namespace": ["b"], "timestamp": "2016-01-02T15:04:05Z", "data": 1.0},
        {"namespace": ["c"], "timestamp": "2016-01-02T15:04:05Z", "data": "x"},
    )
    values = [m.metric_value().encode() for m in decode_batch("snap.json", content)]
    assert values == ["1", "1.0", "x"]


def test_decode_accepts_namespace_element_objects():
    content = _payload({
        "namespace": [{"Value": "intel"}, {"value": "disk"}, "iops"],
        "timestamp": "2016-01-02T15:04:05Z",
        "data": 1,
    })
    assert decode_batch("snap.json", content)[0].namespace == ("intel", "disk", "iops")


def test_decode_empty_batch():
    assert decode_batch("snap.json", b"[]") == []


def test_unknown_content_type_is_rejected_before_decoding():
    with pytest.raises(UnknownContentTypeError) as exc_info:
        decode_batch("snap.gob", b"not even json")
    assert "snap.gob" in str(exc_info.value)


@pytest.mark.parametrize("content", [
    b"{not json",
    b'{"namespace": ["a"]}',
    _payload({"namespace": [], "timestamp": "2016-01-02T15:04:05Z", "data": 1}),
    _payload({"namespace": ["a"], "data": 1}),
    _payload({"namespace": ["a"], "timestamp": "yesterday", "data": 1}),
    _payload({"namespace": ["a"], "timestamp": "2016-01-02T15:04:05", "data": 1}),
])
def test_malformed_content_raises_decode_error(content):
    with pytest.raises(DecodeError):
        decode_batch("snap.json", content)


def test_encode_batch_roundtrip():
    metric = Metric(
        namespace=("foo", "bar"),
        timestamp=datetime(2020, 5, 1, tzinfo=timezone.utc),
        data=[1, 2, 3],
    )
    assert decode_batch("snap.json", encode_batch([metric])) == [metric]


def test_metric_is_immutable():
    metric = Metric(namespace=("foo",), timestamp=datetime.now(timezone.utc), data=1)
    with pytest.raises(ValidationError):
        metric.data = 2
