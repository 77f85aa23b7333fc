# generated automatically from artifacts/ISerialMultipleMintable.json - DO NOT MODIFY

ABI = [
    {
        'inputs': [
            {'internalType': 'uint256', 'name': 'serialId', 'type': 'uint256'},
            {'internalType': 'address', 'name': 'to', 'type': 'address'},
        ],
        'name': 'mintSerial',
        'outputs': [{'internalType': 'uint256', 'name': '', 'type': 'uint256'}],
        'stateMutability': 'nonpayable',
        'type': 'function',
    },
    {
        'inputs': [
            {'internalType': 'uint256', 'name': 'serialId', 'type': 'uint256'},
            {'internalType': 'address[]', 'name': 'to', 'type': 'address[]'},
        ],
        'name': 'mintSerials',
        'outputs': [{'internalType': 'uint256', 'name': '', 'type': 'uint256'}],
        'stateMutability': 'nonpayable',
        'type': 'function',
    },
]
