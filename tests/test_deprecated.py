import yaml

from mtalint.deprecated import (
    CUSTOM_BUILDER_DOC_LINK,
    check_deprecated_opts,
    check_ext_deprecated_opts,
)
from mtalint.yamlnode import load_content_node

MTA_CONTENT = """
ID: mtahtml5
_schema-version: '2.1'
version: 0.0.1

modules:
 - name: ui5app1
   type: html5
   build-parameters:
     builder: npm
     npm-opts: abc
      
 - name: ui5app2
   type: html5
   build-parameters:
     builder: grunt
     grunt-opts: 
       - opt1
       - opt2

 - name: ui5app3
   type: html5
   build-parameters:
     builder: mvn
     maven-opts: 1
"""

MTA_EXT_CONTENT = """
ID: mtahtml5
_schema-version: '2.1'
extends: example
version: 0.0.1

modules:
 - name: ui5app1
   build-parameters:
     builder: npm
     npm-opts: abc
      
 - name: ui5app2
   build-parameters:
     builder: grunt
     grunt-opts: 
       - opt1
       - opt2

 - name: ui5app3
   build-parameters:
     builder: mvn
     maven-opts: 1
"""


def _msg(opt):
    return (
        f'the "{opt}" build configuration parameter is not supported by Cloud MTA Build tool; '
        f'use the "custom" builder instead; see "{CUSTOM_BUILDER_DOC_LINK}"'
    )


def _load(text):
    return yaml.safe_load(text), load_content_node(text)


def test_check_deprecated_opts_sanity():
    mta, node = _load(MTA_CONTENT)
    errors, warnings = check_deprecated_opts(mta, node, "", True)
    assert warnings == []
    assert [(issue.msg, issue.line) for issue in errors] == [
        (_msg("npm-opts"), 11),
        (_msg("grunt-opts"), 17),
        (_msg("maven-opts"), 25),
    ]


def test_check_ext_deprecated_opts_sanity():
    mta, node = _load(MTA_EXT_CONTENT)
    errors, warnings = check_ext_deprecated_opts(mta, node, "", True)
    assert warnings == []
    assert [(issue.msg, issue.line) for issue in errors] == [
        (_msg("npm-opts"), 11),
        (_msg("grunt-opts"), 16),
        (_msg("maven-opts"), 23),
    ]


def test_aliases_usage():
    text = """
_schema1-version: 3.1.0
ID: app
version: 1.0.0

parameters:
  defaults:
    - &build-parameters-app
      npm-opts:
        pre-param: ci

modules:
  - name: mod1
    type: html5
    path: path1
    build-parameters: *build-parameters-app
"""
    mta, node = _load(text)
    errors, warnings = check_deprecated_opts(mta, node, "", True)
    assert warnings == []
    assert [(issue.msg, issue.line) for issue in errors] == [(_msg("npm-opts"), 9)]


def test_modules_without_options_have_no_issues():
    text = """
modules:
 - name: a
   build-parameters:
     builder: npm
 - name: b
"""
    mta, node = _load(text)
    assert check_deprecated_opts(mta, node, "", True) == ([], [])