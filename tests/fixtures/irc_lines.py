"""
Raw Twitch IRC lines for testing
"""

WELCOME_AND_MOTD = (
    ":tmi.twitch.tv 001 bot :Welcome\r\n"
    ":tmi.twitch.tv 376 bot :End of /MOTD\r\n"
)

FULL_AUTH_BURST = (
    ":tmi.twitch.tv 001 bot :Welcome, GLHF!\r\n"
    ":tmi.twitch.tv 002 bot :Your host is tmi.twitch.tv\r\n"
    ":tmi.twitch.tv 003 bot :This server is rather new\r\n"
    ":tmi.twitch.tv 004 bot :-\r\n"
    ":tmi.twitch.tv 375 bot :-\r\n"
    ":tmi.twitch.tv 372 bot :You are in a maze of twisty passages, all alike.\r\n"
    ":tmi.twitch.tv 376 bot :>\r\n"
    ":tmi.twitch.tv CAP * ACK :twitch.tv/membership twitch.tv/tags twitch.tv/commands\r\n"
)

PING = "PING :tmi.twitch.tv"

PRIVMSG = (
    "@badge-info=subscriber/14;badges=subscriber/12,premium/1;color=#1E90FF;"
    "display-name=Viewer;emotes=25:0-4,12-16/1902:6-10;mod=0;room-id=1337;"
    "tmi-sent-ts=1642696567751;user-id=42 "
    ":viewer!viewer@viewer.tmi.twitch.tv PRIVMSG #somechannel :Kappa Keepo Kappa"
)

ACTION_PRIVMSG = ":viewer!viewer@viewer.tmi.twitch.tv PRIVMSG #somechannel :\x01ACTION waves\x01"

USERSTATE = (
    "@badge-info=;badges=moderator/1;color=;display-name=bot;emote-sets=0;mod=1;"
    "subscriber=0;user-type=mod :tmi.twitch.tv USERSTATE #somechannel"
)

ROOMSTATE = (
    "@emote-only=0;followers-only=10;r9k=1;rituals=0;room-id=1337;slow=0;subs-only=1"
    " :tmi.twitch.tv ROOMSTATE #somechannel"
)

CLEARCHAT_TIMEOUT = (
    "@ban-duration=600;room-id=1337;target-user-id=42;tmi-sent-ts=1642715756806"
    " :tmi.twitch.tv CLEARCHAT #somechannel :viewer"
)

CLEARCHAT_ALL = "@room-id=1337;tmi-sent-ts=1642715695392 :tmi.twitch.tv CLEARCHAT #somechannel"

CLEARMSG = (
    "@login=viewer;room-id=;target-msg-id=abc-123;tmi-sent-ts=1642720582342"
    " :tmi.twitch.tv CLEARMSG #somechannel :spam message"
)

USERNOTICE_SUB = (
    "@badge-info=subscriber/5;badges=subscriber/3;login=viewer;msg-id=resub;"
    "msg-param-cumulative-months=5;msg-param-sub-plan=1000;room-id=1337;"
    "system-msg=viewer\\ssubscribed\\sat\\sTier\\s1. :tmi.twitch.tv USERNOTICE #somechannel :Great stream"
)

WHISPER = (
    "@badges=;color=;display-name=Friend;emotes=;message-id=1;thread-id=1_2;user-id=2"
    " :friend!friend@friend.tmi.twitch.tv WHISPER bot :psst"
)

HOSTTARGET_START = ":tmi.twitch.tv HOSTTARGET #somechannel :otherchannel 10"
HOSTTARGET_END = ":tmi.twitch.tv HOSTTARGET #somechannel :- 0"

NOTICE_CHANNEL = "@msg-id=slow_off :tmi.twitch.tv NOTICE #somechannel :This room is no longer in slow mode."
NOTICE_AUTH_FAILED = ":tmi.twitch.tv NOTICE * :Login authentication failed"

GLOBALUSERSTATE = (
    "@badge-info=;badges=;color=#0D4200;display-name=bot;emote-sets=0,33,50;"
    "user-id=1;user-type= :tmi.twitch.tv GLOBALUSERSTATE"
)

RECONNECT = ":tmi.twitch.tv RECONNECT"


def join_line(user: str, channel: str = "somechannel") -> str:
    return f":{user}!{user}@{user}.tmi.twitch.tv JOIN #{channel}"


def part_line(user: str, channel: str = "somechannel") -> str:
    return f":{user}!{user}@{user}.tmi.twitch.tv PART #{channel}"


def userstate_line(channel: str = "somechannel") -> str:
    return f"@badges=;color=;display-name=bot;mod=0 :tmi.twitch.tv USERSTATE #{channel}"
