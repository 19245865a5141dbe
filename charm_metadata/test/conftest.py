# Copyright 2026 TIER IV, inc.
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

import pytest

MYSQL_METADATA = """\
name: mysql
summary: "Database engine"
description: "A pretty popular database"
provides:
  server: mysql
requires:
  backup:
    interface: s3
    optional: true
peers:
  cluster: mysql-ha
categories:
  - databases
tags:
  - sql
storage:
  data:
    type: filesystem
    location: /srv/data
    count: 1-3
    filesystem:
      - ext4
      - type: xfs
        mkfs-options: ["-m", "0"]
        options: [noatime]
"""


@pytest.fixture
def mysql_metadata() -> str:
    return MYSQL_METADATA


@pytest.fixture
def base_doc() -> dict:
    """Smallest valid metadata document."""
    return {
        "name": "dummy",
        "summary": "A dummy charm",
        "description": "Does nothing at all",
    }
