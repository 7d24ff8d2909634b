import csv


def flatten(data, parent_key='', sep='.'):
    items = []
    for k, v in data.items():
        new_key = f'{parent_key}{sep}{k}' if parent_key else k
        if isinstance(v, dict):
            items.extend(flatten(v, new_key, sep=sep).items())
        else:
            items.append((new_key, v))
    return dict(items)


def export_to_csv(summaries, output_file):
    """
    One row per scan line. The header fields of the image the line belongs
    to are repeated on every row so several images can share a file.
    """
    rows = []
    for summary in summaries:
        image = flatten({'file_path': summary.get('file_path', ''), 'header': summary['header']})
        for line in summary['scan_lines']:
            rows.append({**image, **flatten(line, 'scan_line')})

    keys = []
    for row in rows:
        keys.extend(k for k in row if k not in keys)

    with open(output_file, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(keys)
        for row in rows:
            writer.writerow([row.get(key, '') for key in keys])
