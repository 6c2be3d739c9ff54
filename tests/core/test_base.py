"""
Tests for Base Components

Tests the PipelineComponent abstraction.
"""

import pytest

from credit_default.core.base import PipelineComponent


class ConcreteComponent(PipelineComponent):
    """Concrete implementation of PipelineComponent for testing."""

    def run(self, *args, **kwargs):
        self._start_execution()
        self._end_execution()
        return args[0] if args else None


@pytest.fixture
def component_config():
    return {
        'default_params': {'C': 1.0},
        'tuning': {'param_grid': {'max_features': [2, 4]}},
    }


class TestPipelineComponent:
    """Test suite for PipelineComponent base class."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            PipelineComponent({})

    def test_default_name_is_class_name(self, component_config):
        component = ConcreteComponent(component_config)

        assert component.name == "ConcreteComponent"

    def test_custom_name(self, component_config):
        component = ConcreteComponent(component_config, name="Trial")

        assert component.name == "Trial"
        assert component.logger.name == "Trial"

    def test_get_config_dot_notation(self, component_config):
        component = ConcreteComponent(component_config)

        assert component.get_config('default_params.C') == 1.0
        assert component.get_config('tuning.param_grid') == {'max_features': [2, 4]}

    def test_get_config_with_default(self, component_config):
        component = ConcreteComponent(component_config)

        assert component.get_config('nonexistent.key') is None
        assert component.get_config('nonexistent.key', 'fallback') == 'fallback'

    def test_none_config_becomes_empty(self):
        component = ConcreteComponent(None)

        assert component.config == {}

    def test_execution_timing(self, component_config):
        component = ConcreteComponent(component_config)

        component._start_execution()

        assert component._end_execution() >= 0.0
        assert component._end_execution() == 0.0

    def test_run(self, component_config):
        assert ConcreteComponent(component_config).run("value") == "value"
