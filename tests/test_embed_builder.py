"""Tests for webhook message building."""

import json

from keyauth.utils.EmbedBuilder import Embed, EmbedAuthor, EmbedBuilder, EmbedField, EmbedFooter


class TestEmbedBuilder:

    def test_to_json_drops_unset_fields(self):
        embed = Embed(
            title='Login',
            color=0x00ff00,
            author=EmbedAuthor(name='bot'),
            fields=[EmbedField(name='user', value='alice', inline=True), EmbedField(name='ip', value='1.2.3.4')],
            footer=EmbedFooter(text='keyauth'),
            image='https://example.com/a.png',
        )

        message = EmbedBuilder(content='hello', embeds=[embed]).toJSON()

        assert message == {
            'content': 'hello',
            'embeds': [{
                'color': 0x00ff00,
                'title': 'Login',
                'author': {'name': 'bot'},
                'fields': [
                    {'name': 'user', 'value': 'alice', 'inline': True},
                    {'name': 'ip', 'value': '1.2.3.4'},
                ],
                'footer': {'text': 'keyauth'},
                'image': {'url': 'https://example.com/a.png'},
            }],
        }

    def test_to_string_omits_missing_parts(self):
        assert json.loads(EmbedBuilder(content='only text').toString()) == {'content': 'only text'}

    def test_raw_embed_mappings_pass_through(self):
        message = EmbedBuilder(embeds=[{'title': 'raw'}]).toJSON()
        assert message == {'content': None, 'embeds': [{'title': 'raw'}]}
