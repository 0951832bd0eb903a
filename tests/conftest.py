# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Shared fixtures: an in-memory adapter recording registrations."""

import pytest

from genro_swagger import Router, RouterAdapter
from genro_swagger.core.registry import join_paths
from genro_swagger.exceptions import AdapterError

TITLE = "test swagger title"
VERSION = "test swagger version"


class RecordingAdapter(RouterAdapter):
    """Adapter keeping (method, full path, handler) triples in a shared list.

    Routes whose full path is listed in ``reject`` are refused the way a
    backend refuses a malformed template.
    """

    def __init__(self, prefix="", registered=None, reject=None):
        self.prefix = prefix
        self.registered = registered if registered is not None else []
        self.reject = reject if reject is not None else set()

    def register_route(self, method, path, handler):
        full_path = join_paths(self.prefix, path)
        if full_path in self.reject:
            raise AdapterError(method, full_path, "rejected by backend")
        self.registered.append((method, full_path, handler))

    def new_scope(self, path_prefix):
        return RecordingAdapter(
            join_paths(self.prefix, path_prefix), self.registered, self.reject
        )

    def document_handler(self, render, media_type):
        def serve_document():
            return media_type, render()

        return serve_document

    def handler_for(self, method, path):
        for reg_method, reg_path, handler in self.registered:
            if (reg_method, reg_path) == (method, path):
                return handler
        return None


@pytest.fixture
def adapter_class():
    return RecordingAdapter


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def router(adapter):
    return Router(adapter, {"title": TITLE, "version": VERSION})
