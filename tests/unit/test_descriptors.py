import pytest

from environment_exporter.metrics.descriptors import MetricDescriptor, Sample, build_descriptors


def test_build_descriptors_names_and_help():
    descriptors = build_descriptors("sensors_1")
    assert [(d.name, d.documentation, d.field) for d in descriptors] == [
        ("sensors_1_temperature", "Shows temperature", "temperature"),
        ("sensors_1_pressure", "Shows pressure", "pressure"),
        ("sensors_1_humidity", "Shows humidity", "humidity"),
    ]


def test_descriptors_have_no_labels():
    assert all(d.labels == () for d in build_descriptors("env"))


def test_build_descriptors_is_deterministic():
    assert build_descriptors("env") == build_descriptors("env")


@pytest.mark.parametrize("prefix", ["", "sensors-1", "1abc", "with space", None])
def test_invalid_prefix(prefix):
    with pytest.raises(ValueError):
        build_descriptors(prefix)


def test_descriptor_and_sample_are_immutable():
    descriptor = MetricDescriptor(name="x_temperature", documentation="Shows temperature", field="temperature")
    sample = Sample(descriptor=descriptor, value=1.0, timestamp=2.0)
    with pytest.raises(AttributeError):
        descriptor.name = "y"
    with pytest.raises(AttributeError):
        sample.value = 3.0
