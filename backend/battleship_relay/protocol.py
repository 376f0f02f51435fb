"""Wire event names shared with the browser client."""

# server -> client
PLAYER_NUMBER = 'player-number'
PLAYER_CONNECTION = 'player-connection'
ENEMY_READY = 'enemy-ready'
TIMEOUT = 'timeout'

# client -> server
PLAYER_READY = 'player-ready'

# both directions
CHECK_PLAYERS = 'check-players'
FIRE = 'fire'
FIRE_REPLY = 'fire-reply'

# Sent in PLAYER_NUMBER when every slot is taken
REJECTED_SLOT = -1
