# Package logger
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

import logging

logger = logging.getLogger("wikiref")
