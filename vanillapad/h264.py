"""H.264 parameter sets and slice headers for the gamepad video stream."""

from __future__ import annotations

from .bitstream import BitWriter

START_CODE = b"\x00\x00\x00\x01"

_PPS = bytes([0x00, 0x00, 0x00, 0x01, 0x68, 0xEE, 0x06, 0x0C, 0xE8])

_IDR_SLICE_HEADER = 0x25B804FF
_P_SLICE_HEADER = 0x21E003FF


def _u(value: int, width: int = 1) -> tuple:
    return ("u", value, width)


def _ue(value: int) -> tuple:
    return ("ue", value)


_SPS_FIELDS = (
    _u(0),          # forbidden_zero_bit
    _u(3, 2),       # nal_ref_idc
    _u(7, 5),       # nal_unit_type (SPS)
    _u(100, 8),     # profile_idc
    _u(0), _u(0), _u(0), _u(0), _u(0), _u(0),  # constraint_set0..5 flags
    _u(0, 2),       # reserved_zero_2bits
    _u(0x20, 8),    # level_idc
    _ue(0),         # seq_parameter_set_id
    _ue(1),         # chroma_format_idc
    _ue(0),         # bit_depth_luma_minus8
    _ue(0),         # bit_depth_chroma_minus8
    _u(0),          # qpprime_y_zero_transform_bypass_flag
    _u(0),          # seq_scaling_matrix_present_flag
    _ue(4),         # log2_max_frame_num_minus4
    _ue(2),         # pic_order_cnt_type
    _ue(1),         # max_num_ref_frames
    _u(1),          # gaps_in_frame_num_value_allowed_flag
    _ue(53),        # pic_width_in_mbs_minus1
    _ue(29),        # pic_height_in_map_units_minus1
    _u(1),          # frame_mbs_only_flag
    _u(1),          # direct_8x8_inference_flag
    _u(1),          # frame_cropping_flag
    _ue(0),         # frame_crop_left_offset
    _ue(5),         # frame_crop_right_offset
    _ue(0),         # frame_crop_top_offset
    _ue(0),         # frame_crop_bottom_offset
    _u(1),          # vui_parameters_present_flag
    _u(0),          # aspect_ratio_info_present_flag
    _u(0),          # overscan_info_present_flag
    _u(0),          # video_signal_type_present_flag
    _u(0),          # chroma_loc_info_present_flag
    _u(0),          # timing_info_present_flag
    _u(0),          # nal_hrd_parameters_present_flag
    _u(0),          # vcl_hrd_parameters_present_flag
    _u(0),          # pic_struct_present_flag
    _u(1),          # bitstream_restriction_flag
    _u(1),          # motion_vectors_over_pic_boundaries_flag
    _ue(2),         # max_bytes_per_pic_denom
    _ue(1),         # max_bits_per_mb_denom
    _ue(16),        # log2_max_mv_length_horizontal
    _ue(16),        # log2_max_mv_length_vertical
    _ue(0),         # max_num_reorder_frames
    _ue(1),         # max_dec_frame_buffering
    _u(1),          # rbsp_stop_one_bit
)


def generate_sps_params() -> bytes:
    """Return the sequence parameter set NAL unit, without a start code."""
    writer = BitWriter()
    for field in _SPS_FIELDS:
        if field[0] == "u":
            writer.write_bits(field[1], field[2])
        else:
            writer.write_exp_golomb(field[1])
    writer.align()
    return bytes(writer.buffer[: writer.bit_index // 8])


def generate_pps_params() -> bytes:
    """Return the picture parameter set, including its start code."""
    return _PPS


def generate_h264_header() -> bytes:
    """Return a start code followed by the SPS and the PPS."""
    return START_CODE + generate_sps_params() + generate_pps_params()


def slice_header(is_idr: bool, frame_decode_num: int) -> bytes:
    """Return the 4-byte slice header placed before each frame's payload."""
    if is_idr:
        word = _IDR_SLICE_HEADER
    else:
        word = _P_SLICE_HEADER | ((frame_decode_num & 0xFF) << 13)
    return word.to_bytes(4, "big")