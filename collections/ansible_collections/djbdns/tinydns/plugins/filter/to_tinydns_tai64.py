# -*- coding: utf-8 -*-

from __future__ import annotations

from ansible.errors import AnsibleFilterError

from ansible_collections.djbdns.tinydns.plugins.module_utils import tai64


DOCUMENTATION = r'''
name: to_tinydns_tai64
short_description: Convert a date/time string to a tinydns-data TAI64 label
version_added: "1.0.0"
author: djbdns.tinydns (@djbdns-tinydns)
description:
  - Converts a date/time string to the TAI64 timestamp string used by tinydns-data
    for the time-to-die/starting-time field.
  - Both C(2014-03-20 01:14:56+13:00) and C(2014-03-20 01:14:56 NZDT) are understood.
  - Zone abbreviations are matched case-insensitively (C(nzdt) works like C(NZDT)).
  - An abbreviation that is neither built in nor listed in I(tzinfos) is ignored, so a mistyped
    zone silently falls back to I(default_tz) (or the controller's local time).
  - Fractional seconds are truncated.
  - Instants more than 10 seconds before the Unix epoch are biased upwards
    (C(2^62 - seconds)), matching labels generated by earlier tooling.
requirements:
  - python-dateutil
options:
  _input:
    description: Date/time string, with a numeric UTC offset or a zone abbreviation.
    type: string
    required: true
  default_tz:
    description:
      - Time zone for strings carrying neither offset nor abbreviation.
      - IANA name (C(Pacific/Auckland)) or abbreviation (C(NZDT)). Defaults to the controller's local time.
    type: string
  tzinfos:
    description: Extra zone abbreviations mapped to offsets in seconds east of UTC, strictly within 24 hours.
    type: dict
'''

EXAMPLES = r'''
vars:
  expires: "2014-03-20 01:14:56+13:00"

tasks:
  - set_fact:
      ttd: "{{ expires | djbdns.tinydns.to_tinydns_tai64 }}"
      starts: "{{ '2014-03-20 01:14:56' | djbdns.tinydns.to_tinydns_tai64(default_tz='Pacific/Auckland') }}"
      local: "{{ '2014-03-20 01:14:56 CHADT' | djbdns.tinydns.to_tinydns_tai64(tzinfos={'CHADT': 49500}) }}"

  # +fqdn:ip:ttl:timestamp:lo
  - copy:
      dest: /etc/tinydns/root/data.d/www
      content: "+www.example.com:192.0.2.10:0:{{ ttd }}\n"
'''

RETURN = r'''
_value:
  description: 16 lowercase hex digit external TAI64 label.
  type: string
  sample: "4000000053298a4a"
'''


def to_tinydns_tai64(*args, default_tz=None, tzinfos=None) -> str:
    """Convert a date/time string to a tinydns-data TAI64 label.

    Raises AnsibleFilterError on a wrong argument count, a non-string
    argument or an unparseable date/time.
    """
    try:
        value = tai64.check_arguments(args)
        return tai64.encode(value, default_tz=default_tz, tzinfos=tzinfos)
    except tai64.Tai64Error as e:
        msg = str(e)
        if e.hint:
            msg = f"{msg} ({e.hint})"
        raise AnsibleFilterError(msg) from e


class FilterModule(object):
    def filters(self):
        return {
            'to_tinydns_tai64': to_tinydns_tai64,
        }
