"""Shared test fixtures."""

from __future__ import annotations

import pytest


class AnsibleExitJson(Exception):
    """Raised in place of AnsibleModule.exit_json."""

    def __init__(self, result):
        super().__init__(result)
        self.result = result


class AnsibleFailJson(Exception):
    """Raised in place of AnsibleModule.fail_json."""

    def __init__(self, result):
        super().__init__(result)
        self.result = result


class FakeAnsibleModule:
    """Records construction arguments and fills params from argument_spec defaults.

    Subclasses provide module_args and their own instances list.
    """

    def __init__(self, argument_spec, **kwargs):
        self.argument_spec = argument_spec
        self.kwargs = kwargs
        self.params = {name: spec.get('default') for name, spec in argument_spec.items()}
        self.params.update(self.module_args)
        self.check_mode = False
        self.debug_messages: list[str] = []
        type(self).instances.append(self)

    def debug(self, msg):
        self.debug_messages.append(msg)

    def exit_json(self, **kwargs):
        raise AnsibleExitJson(kwargs)

    def fail_json(self, **kwargs):
        kwargs['failed'] = True
        raise AnsibleFailJson(kwargs)


@pytest.fixture
def run_module(monkeypatch):
    """Run a module's run_module() with the given args; returns (module, outcome)."""

    def _run(mod, **module_args):
        fake = type('FakeModule', (FakeAnsibleModule,), {'module_args': module_args, 'instances': []})
        monkeypatch.setattr(mod, 'AnsibleModule', fake)
        try:
            mod.run_module()
        except (AnsibleExitJson, AnsibleFailJson) as e:
            return fake.instances[-1], e
        raise AssertionError('module returned without exit_json or fail_json')

    return _run
