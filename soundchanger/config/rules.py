#!/usr/bin/env python
# coding=utf-8

# Sound change rulesets. Each ruleset has a "name", which should be unique,
# and a list of "rules". Each rule has a "name", which identifies it within
# the ruleset, and a "notation": the old form and the new form of the sound
# change, e.g. "[ln] > [ll]". Rules are applied in the order of their
# "order_id". A rule with "skip" set is disabled unless toggled on, and
# a "condition" takes the analysed syllables of a word and returns whether
# the rule may apply to it.


def polysyllabic(syllables):
    return len(syllables) > 1


ancient_telerin = {
    "name": "ancient_telerin",
    "rules": [
        {
            "name": "3648128347",
            "order_id": "00100",
            "notation": "[{ptkpʰkʰbdgm}V₁{rl}V́₁-] > [{ptkpʰkʰbdgm}ø{rl}V́₁-]",
            "description": "unstressed initial syllables reduced to favored clusters",
            "url": "https://eldamo.org/content/words/word-3648128347.html",
        },
        {
            "name": "171120983",
            "order_id": "00200",
            "notation": "[kw|kʰw|gw|ŋgw|ŋkw|ŋw-] > [p|pʰ|b|mb|mp|m-]",
            "description": "labialized velars became labials",
            "url": "https://eldamo.org/content/words/word-171120983.html",
        },
        {
            "name": "1532676669",
            "order_id": "00300",
            "notation": "[{ttʰdnl}j-] > [{ttʰdnl}ø-]",
            "description": "[j] was lost after initial dentals",
            "url": "https://eldamo.org/content/words/word-1532676669.html",
            "skip": True,
        },
        {
            "name": "1062284643",
            "order_id": "00400",
            "notation": "[ln] > [ll]",
            "description": "[ln] became [ll]",
            "url": "https://eldamo.org/content/words/word-1062284643.html",
        },
        {
            "name": "981459769",
            "order_id": "00500",
            "notation": "[-V{ptks}] > [-Vø]",
            "description": "final voiceless stops and [s] vanished in polysyllables",
            "url": "https://eldamo.org/content/words/word-981459769.html",
            "condition": polysyllabic,
        },
        {
            "name": "e",
            "order_id": "00600",
            "notation": "[{mn}s] > [ss]",
            "description": "[ms], [ns] became [ss]",
            "url": "https://eldamo.org/content/words/word-e.html",
        },
    ],
}
