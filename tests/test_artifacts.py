import pytest
import yaml

from mtalint.artifacts import (
    if_module_path_empty,
    if_module_path_exists,
    if_no_source_param_bool,
)
from mtalint.yamlnode import load_content_node

MTA_CONTENT = """
ID: mtahtml5
_schema-version: '2.1'
version: 0.0.1

modules:
 - name: ui5app
   type: html5
   path: ui5app
   parameters:
      disk-quota: 256M
      memory: 256M
   requires:
    - name: uaa_mtahtml5
    - name: dest_mtahtml5

 - name: ui5app2
   type: html5
   path: ui5app2
   parameters:
      disk-quota: 256M
      memory: 256M
   requires:
   - name: uaa_mtahtml5
   - name: dest_mtahtml5

 - name: ui5app3
   type: html5
   build-parameters:
     no-source: true

 - name: ui5app4
   type: html5
   build-parameters:
     no-source: abc

 - name: ui5app5
   type: html5
   path: 
   build-parameters:
     no-source: 
        - a
        - b

resources:
 - name: uaa_mtahtml5
   parameters:
      path: ./xs-security.json
      service-plan: application
   type: com.company.xs.uaa

 - name: dest_mtahtml5
   parameters:
      service-plan: lite
      service: destination
   type: org.cloudfoundry.managed-service
"""


@pytest.fixture
def loaded():
    return yaml.safe_load(MTA_CONTENT), load_content_node(MTA_CONTENT)


@pytest.fixture
def project(tmp_path):
    (tmp_path / "ui5app").mkdir()
    return str(tmp_path)


def test_if_module_path_exists(loaded, project):
    mta, root = loaded
    issues, warnings = if_module_path_exists(mta, root, project, True)
    assert len(issues) == 1
    assert issues[0].msg == 'the "ui5app2" path of the "ui5app2" module does not exist'
    assert issues[0].line == 19
    assert warnings == []


def test_if_module_path_exists_accepts_files(tmp_path):
    content = """
modules:
 - name: m
   path: app.zip
"""
    (tmp_path / "app.zip").write_text("x")
    issues, _ = if_module_path_exists(
        yaml.safe_load(content), load_content_node(content), str(tmp_path), True
    )
    assert issues == []


def test_if_module_path_empty(loaded, project):
    mta, root = loaded
    issues, warnings = if_module_path_empty(mta, root, project, True)
    assert len(issues) == 2
    assert issues[0].msg == 'the path of the "ui5app4" module is not defined'
    assert issues[0].line == 32
    assert issues[1].msg == 'the path of the "ui5app5" module is empty'
    assert issues[1].line == 39
    assert warnings == []


def test_if_no_source_param_bool(loaded, project):
    mta, root = loaded
    issues, warnings = if_no_source_param_bool(mta, root, project, True)
    assert len(issues) == 2
    assert issues[0].msg == 'the "no-source" build parameter must be a boolean'
    assert issues[1].msg == 'the "no-source" build parameter must be a boolean'
    assert issues[0].line == 35
    assert issues[1].line == 42
    assert warnings == []