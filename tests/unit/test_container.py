import pytest

from conftest import FakeConnectionManager, FakeCursor, make_config
from hair_advisor.core.container import Container, get_container, reset_container, singleton
from hair_advisor.core.database.analysis_service import AnalysisService
from hair_advisor.core.exceptions import ConfigurationError
from hair_advisor.core.parsing.report_parser import ReportParser


def test_singleton_and_factory_registration():
    container = Container()
    container.register_singleton('one', lambda: object())
    container.register_factory('many', lambda: object())

    assert container.get('one') is container.get('one')
    assert container.get('many') is not container.get('many')
    assert container.has('one')
    with pytest.raises(KeyError):
        container.get('missing')


def test_reset_singleton_recreates_instance():
    container = Container()

    @singleton
    def create():
        return object()

    container.register_singleton('svc', create)
    first = container.get('svc')
    container.reset_singleton('svc')

    assert container.get('svc') is not first


def test_default_services_use_registered_config():
    container = get_container()
    container.register_instance('config', make_config())

    parser = container.get('report_parser')

    assert isinstance(parser, ReportParser)
    assert container.get('report_parser') is parser


def test_analysis_service_resolves_connection_manager():
    container = get_container()
    manager = FakeConnectionManager(FakeCursor())
    container.register_instance('connection_manager', manager)

    service = container.get('analysis_service')

    assert isinstance(service, AnalysisService)
    assert service.connection_manager is manager
    assert container.get('analysis_service') is not service


def test_services_without_credentials_raise_configuration_error():
    container = get_container()
    container.register_instance('config', make_config())

    with pytest.raises(ConfigurationError):
        container.get('analysis_service')
    with pytest.raises(ConfigurationError):
        container.get('advice_client')


def test_reset_container_builds_a_new_one():
    container = get_container()
    reset_container()

    assert get_container() is not container
