# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)
