import yaml

from mtalint.deployer import MISSING_CONFIG_DOC_LINK, check_deployer_constraints
from mtalint.yamlnode import load_content_node

CONTENT = """
ID: mtahtml5
_schema-version: '2.1'
version: 0.0.1

parameters:
  deploy_mode: html5-repo

modules:
 - name: ui5app1
   type: html5
      
 - name: ui5app2
   type: html5
   build-parameters:
     builder: grunt

 - name: ui5app3
   type: html5
   build-parameters:
     supported-platforms: []

 - name: ui5app4
   type: html5
   build-parameters:
     build-result: dist

 - name: ui5app5
   type: html5
   build-parameters:
     supported-platforms: []
     build-result: dist

 - name: ui5app6
   type: html5
   build-parameters:
     supported-platforms: [cf, neo]
     build-result: dist1
"""


def _both_missing(name):
    return (
        f'the "{name}" module does not contain the mandatory "supported-platforms" and '
        f'"build-result" build configurations; see "{MISSING_CONFIG_DOC_LINK}"'
    )


def _one_missing(name, field):
    return (
        f'the "{name}" module does not contain the mandatory "{field}" build configuration; '
        f'see "{MISSING_CONFIG_DOC_LINK}"'
    )


def _check(text, strict=True):
    return check_deployer_constraints(yaml.safe_load(text), load_content_node(text), "", strict)


def test_sanity():
    errors, warnings = _check(CONTENT)
    assert warnings == []
    assert [(issue.msg, issue.line) for issue in errors] == [
        (_both_missing("ui5app1"), 10),
        (_both_missing("ui5app2"), 13),
        (_one_missing("ui5app3", "build-result"), 18),
        (_one_missing("ui5app4", "supported-platforms"), 23),
    ]


def test_not_strict_still_reports_errors():
    errors, warnings = _check(CONTENT, strict=False)
    assert warnings == []
    assert len(errors) == 4


def test_other_deploy_mode_is_not_checked():
    errors, warnings = _check(CONTENT.replace("html5-repo", "other"))
    assert (errors, warnings) == ([], [])


def test_non_html5_modules_are_not_checked():
    text = """
parameters:
  deploy_mode: html5-repo
modules:
 - name: srv
   type: nodejs
"""
    assert _check(text) == ([], [])