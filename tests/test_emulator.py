#!/usr/bin/env python
# -*- coding: utf-8 -*-

from pubsub_sink.emulator import (EMULATOR_HOST_ENV, get_emulator_endpoint,
                                  to_emulator_endpoint)


def test_to_emulator_endpoint():
    assert to_emulator_endpoint('localhost:8085') == 'emulator:///localhost:8085'


def test_no_emulator(monkeypatch):
    monkeypatch.delenv(EMULATOR_HOST_ENV, raising=False)

    assert get_emulator_endpoint() is None
    assert get_emulator_endpoint('pubsub.googleapis.com:443') is None


def test_prefixed_endpoint(monkeypatch):
    monkeypatch.delenv(EMULATOR_HOST_ENV, raising=False)

    assert get_emulator_endpoint(to_emulator_endpoint('localhost:8085')) == 'localhost:8085'


def test_env_var_takes_precedence(monkeypatch):
    monkeypatch.setenv(EMULATOR_HOST_ENV, 'emulator-host:8681')

    assert get_emulator_endpoint() == 'emulator-host:8681'
    assert get_emulator_endpoint('emulator:///localhost:8085') == 'emulator-host:8681'
    assert get_emulator_endpoint('pubsub.googleapis.com:443') == 'emulator-host:8681'
