"""Domain services: conversion models, tiering, merging, verification."""
