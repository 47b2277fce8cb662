#!/usr/bin/env python

import argparse
import json

import dotenv

from exercisely.clients import DynamoClient
from exercisely.models import ExerciseManager

dotenv.load_dotenv()


def parse_args():
    parser = argparse.ArgumentParser(description='Load the exercise catalogue into dynamo')
    parser.add_argument('-f', dest='path', default='data.json', help='path to the catalogue json file')
    parser.add_argument('-t', dest='table_name', help='dynamo table, defaults to $DYNAMO_TABLE')
    return parser.parse_args()


def main():
    args = parse_args()
    with open(args.path) as fh:
        catalog_entries = json.load(fh)

    clients = {'dynamo': DynamoClient(table_name=args.table_name) if args.table_name else DynamoClient()}
    exercise_manager = ExerciseManager(clients)
    print(f'Seeding {len(catalog_entries)} exercises from `{args.path}`... ', end='', flush=True)
    exercise_manager.seed_catalog(catalog_entries)
    print('done.')


if __name__ == '__main__':
    main()
