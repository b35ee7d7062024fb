"""Redis adapter – server-side Lua scripts."""
from __future__ import annotations

# KEYS[1]  bucket key
# ARGV[1]  capacity
# ARGV[2]  refill rate, tokens per second
# ARGV[3]  caller's clock, epoch milliseconds
# ARGV[4]  inactivity expiry in seconds (optional, 3600)
# Returns 1 to admit, 0 to reject.
TOKEN_BUCKET_LUA = """
local key = KEYS[1]
local capacity = tonumber(ARGV[1])
local refill_rate = tonumber(ARGV[2])
local now = tonumber(ARGV[3])
local ttl = tonumber(ARGV[4]) or 3600

local state = redis.call('HMGET', key, 'tokens', 'last_refill_time')
local tokens = tonumber(state[1]) or 0
local last_refill = tonumber(state[2]) or now

local elapsed = now - last_refill
if elapsed > 0 then
    tokens = math.min(capacity, tokens + (elapsed / 1000.0) * refill_rate)
end

local allowed = 0
if tokens >= 1 then
    tokens = tokens - 1
    allowed = 1
end

redis.call('HSET', key, 'tokens', tokens, 'last_refill_time', now)
redis.call('EXPIRE', key, ttl)
return allowed
"""

__all__ = ["TOKEN_BUCKET_LUA"]
