import json
import logging
import os
import re

import requests

from exercisely.models.exercise.enums import (
    ExerciseCategory,
    ExerciseEquipment,
    ExerciseForce,
    ExerciseLevel,
    ExerciseMechanic,
    ExerciseMuscle,
)

OPENAI_MODEL = os.environ.get('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_CHAT_COMPLETIONS_URL = 'https://api.openai.com/v1/chat/completions'

logger = logging.getLogger()

json_fence_re = re.compile(r'```(?:json)?\n([\s\S]*?)\n```')


class FilterExtractorException(Exception):
    pass


class FilterExtractorClient:
    """
    Translates a free-text query into a best-effort exercise filter object.
    The result is untrusted: the caller is responsible for dropping fields it can't use.
    """

    def __init__(self, api_creds_getter, model=OPENAI_MODEL, url=OPENAI_CHAT_COMPLETIONS_URL, timeout=20):
        self.api_creds_getter = api_creds_getter
        self.model = model
        self.url = url
        self.timeout = timeout

    @property
    def api_creds(self):
        if not hasattr(self, '_api_creds'):
            self._api_creds = self.api_creds_getter()
        return self._api_creds

    def build_prompt(self, query):
        def one_or_more(values):
            return 'one or more of ' + ', '.join(f"'{v}'" for v in values)

        return (
            'You are an assistant that extracts exercise filter criteria from user queries. '
            'The possible filters are:\n'
            '- name: string\n'
            f'- force: {one_or_more(ExerciseForce._ALL)}\n'
            f'- level: {one_or_more(ExerciseLevel._ALL)}\n'
            f'- mechanic: {one_or_more(ExerciseMechanic._ALL)}\n'
            f'- equipment: {one_or_more(ExerciseEquipment._ALL)}\n'
            f'- muscle: {one_or_more(ExerciseMuscle._ALL)}\n'
            f'- category: {one_or_more(ExerciseCategory._ALL)}\n\n'
            'Extract the relevant filters from the user\'s query and output them as a JSON object. '
            'Omit any filter that is not mentioned. If the query implies multiple values for a filter, '
            'return an array of the relevant values. For the muscle filter include all relevant muscle '
            "groups (e.g. 'legs' maps to ['quadriceps', 'glutes', 'hamstrings', 'calves']).\n\n"
            f'User query: "{query}"'
        )

    def parse_content(self, content):
        match = json_fence_re.search(content)
        content = match.group(1) if match else content
        try:
            extracted = json.loads(content.strip())
        except ValueError as err:
            raise FilterExtractorException(f'Unable to parse filters from extractor reply: `{content}`') from err
        if not isinstance(extracted, dict):
            raise FilterExtractorException(f'Extractor reply is not an object: `{content}`')
        return extracted

    def extract_filters(self, query):
        "Returns a dict shaped like the structured filter query, with any subset of its fields"
        headers = {'Authorization': f'Bearer {self.api_creds["apiKey"]}'}
        data = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': self.build_prompt(query)},
                {'role': 'user', 'content': query},
            ],
            'temperature': 0,
        }
        try:
            resp = requests.post(self.url, headers=headers, json=data, timeout=self.timeout)
        except requests.RequestException as err:
            raise FilterExtractorException('Filter extractor request failed') from err
        if resp.status_code != 200:
            raise FilterExtractorException(f'Filter extractor error `{resp.status_code}` with body `{resp.text}`')
        try:
            content = resp.json()['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError) as err:
            raise FilterExtractorException(f'Unexpected filter extractor reply: `{resp.text}`') from err
        if not content:
            raise FilterExtractorException('No content returned from filter extractor')
        return self.parse_content(content)
