#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, djbdns.tinydns contributors
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = r'''
---
module: tinydns_tai64
short_description: Compute tinydns-data TAI64 timestamp labels
version_added: "1.0.0"
author: djbdns.tinydns (@djbdns-tinydns)
description:
  - Converts one or several date/time strings to the 16 hex digit TAI64 labels
    used by tinydns-data in the timestamp field of data lines.
  - Runs on the managed host, so naive date/time strings use that host's local time
    unless I(default_tz) is set.
requirements:
  - python-dateutil
notes:
  - This is a read-only module; it always returns C(changed=false).
  - Use the C(djbdns.tinydns.to_tinydns_tai64) filter for conversions on the controller.
options:
  datetime:
    description: Date/time string to convert (e.g. C(2014-03-20 01:14:56+13:00)).
    type: str
  datetimes:
    description: Several date/time strings to convert.
    type: list
    elements: str
  default_tz:
    description: Time zone (IANA name or abbreviation) for strings without an offset.
    type: str
  tzinfos:
    description: Extra zone abbreviations mapped to offsets in seconds east of UTC, strictly within 24 hours.
    type: dict
    default: {}
'''

EXAMPLES = r'''
- name: Label for a record that dies at the end of the maintenance window
  djbdns.tinydns.tinydns_tai64:
    datetime: "2014-03-20 01:14:56 NZDT"
  register: ttd

- name: Labels for a batch of start times
  djbdns.tinydns.tinydns_tai64:
    datetimes:
      - "2025-01-01 00:00:00"
      - "2025-07-01 00:00:00"
    default_tz: Europe/Amsterdam
  register: starts
'''

RETURN = r'''
tai64:
  description: TAI64 label for I(datetime).
  returned: when datetime is given
  type: str
  sample: "4000000053298a4a"
epoch:
  description: Seconds since the Unix epoch (UTC) for I(datetime), fraction truncated.
  returned: when datetime is given
  type: int
  sample: 1395231296
results:
  description: One entry per item of I(datetimes), in order.
  returned: when datetimes is given
  type: list
  elements: dict
  sample:
    - datetime: "2025-01-01 00:00:00"
      epoch: 1735686000
      tai64: "400000006774777a"
'''

from dataclasses import asdict

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.djbdns.tinydns.plugins.module_utils import tai64


def _convert(module, value, params):
    try:
        st = tai64.stamp(value, default_tz=params.get('default_tz'), tzinfos=params.get('tzinfos'))
    except tai64.Tai64Error as e:
        module.fail_json(msg=f"Cannot convert {value!r} to a TAI64 label: {e}", hint=e.hint)
    module.debug(f"tinydns_tai64: {value!r} -> epoch={st.epoch} tai64={st.tai64}")
    return st


def run_module():
    args_spec = dict(
        datetime=dict(type='str', required=False),
        datetimes=dict(type='list', elements='str', required=False),
        default_tz=dict(type='str', required=False),
        tzinfos=dict(type='dict', default={}),
    )
    module = AnsibleModule(
        argument_spec=args_spec,
        required_one_of=[('datetime', 'datetimes')],
        mutually_exclusive=[('datetime', 'datetimes')],
        supports_check_mode=True,
    )
    p = module.params

    result = dict(changed=False)
    if p.get('datetime') is not None:
        st = _convert(module, p['datetime'], p)
        result.update(tai64=st.tai64, epoch=st.epoch)
    else:
        result['results'] = [asdict(_convert(module, v, p)) for v in p['datetimes']]

    module.exit_json(**result)


def main():
    run_module()


if __name__ == '__main__':
    main()
